#!/usr/bin/env python3
"""
Main test runner for stunt compiler tests.

Runs a quick end-to-end pipeline check, then every unittest suite in tests/.
"""

import sys
import os
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)


def check_pipeline() -> bool:
    """Compile a valid and an invalid program through every stage."""

    print("🚀 stunt Compiler Test Suite")
    print("=" * 60)

    try:
        from stunt.lexer import Lexer
        from stunt.parser import Parser
        from stunt.analyzer import SemanticAnalyzer
        from stunt.codegen import CodeGenerator
        from stunt.diagnostics import format_diagnostic

        print("✅ All compiler modules imported successfully")
        print()
    except ImportError as e:
        print(f"❌ Failed to import compiler modules: {e}")
        return False

    print("Testing simple compilation pipeline...")
    code = """
    let total = 0x10 + 1_000;
    const limit = 3.5;
    if (total > limit) {
        total = total - 1;
    } else if (total == limit) {
        total = 0;
    }
    """

    print("  🔧 Lexing...")
    lexer = Lexer(code)
    tokens = lexer.tokenize()
    if lexer.has_errors():
        print(f"     ❌ Lexer errors: {len(lexer.diagnostics)}")
        return False
    print(f"     Generated {len(tokens)} tokens")

    print("  🔧 Parsing...")
    parser = Parser(tokens)
    program = parser.parse()
    if parser.diagnostics:
        print(f"     ❌ Parse errors: {len(parser.diagnostics)}")
        for diagnostic in parser.diagnostics:
            print(format_diagnostic(diagnostic, code))
        return False
    print(f"     Generated AST with {len(program.statements)} top-level statements")

    print("  🔧 Semantic Analysis...")
    analysis_result = SemanticAnalyzer().analyze(program)
    if analysis_result.has_errors():
        print(f"     ❌ Semantic errors: {len(analysis_result.errors)}")
        for diagnostic in analysis_result.errors:
            print(format_diagnostic(diagnostic, code))
        return False
    print(f"     ✅ No semantic errors, {len(analysis_result.warnings)} warnings")

    print("  🔧 Code Generation...")
    output = CodeGenerator().generate(program)
    print("-" * 40)
    print(output, end="")
    print("-" * 40)
    print()

    print("  ❌ Testing error handling...")
    error_code = "let x = 1\nlet x = y;\nconst = 2;\n"
    tokens = Lexer(error_code).tokenize()
    parser = Parser(tokens)
    parser.parse()
    if len(parser.diagnostics) != 2:
        print(f"     ❌ Expected 2 parse errors, got {len(parser.diagnostics)}")
        return False
    print(f"     ✅ Error handling successful: caught {len(parser.diagnostics)} expected errors")
    print()
    return True


def run_all_tests() -> bool:
    """Run the pipeline check and all test suites."""
    if not check_pipeline():
        return False

    suite = unittest.defaultTestLoader.discover(os.path.join(project_root, "tests"))
    result = unittest.TextTestRunner(verbosity=2).run(suite)
    return result.wasSuccessful()


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
