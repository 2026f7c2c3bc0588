"""
Command line interface for the stunt compiler.

Usage:
    stunt tokenize INPUT [OUTPUT]

Prints the numbered source, the token table and the syntax tree, then any
diagnostics with the offending span underlined. Exits with status 1 when
compilation fails; writes the generated code to OUTPUT when one is given.
"""

import logging
from typing import List, Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from . import __version__
from .config import CompilerOptions
from .diagnostics import Diagnostic, split_diagnostic
from .lexer import Token
from .parser import format_tree
from .pipeline import CompilationResult, CompilationStage, compile_source

SEVERITY_STYLES = {
    "error": "bold red",
    "warning": "bold yellow",
}


def _configure_logging(verbose: bool):
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def print_source(console: Console, filename: str, content: str):
    """Numbered listing with a gutter wide enough for the last line number."""
    lines = content.split("\n")
    pad = len(str(len(lines)))

    console.print(Text(f"{'':>{pad}}┌─ {filename}", style="dim"))
    console.print(Text(f"{'':>{pad}}|", style="dim"))
    for number, line in enumerate(lines, start=1):
        row = Text(f"{number:>{pad}}| ", style="dim")
        row.append(line)
        console.print(row)


def print_tokens(console: Console, tokens: List[Token]):
    table = Table(show_edge=False, box=None, pad_edge=False)
    table.add_column("Type", style="cyan")
    table.add_column("Lexeme")
    table.add_column("Position", justify="right")
    table.add_column("Literal", style="green")

    for token in tokens:
        literal = "null" if token.literal is None else repr(token.literal)
        table.add_row(token.type.name, Text(token.lexeme), str(token.position), Text(literal))

    console.print(table)


def print_diagnostic(console: Console, diagnostic: Diagnostic, source: str, filename: str):
    parts = split_diagnostic(diagnostic, source, filename)
    style = SEVERITY_STYLES[diagnostic.severity.value]
    pad = " " * (len(parts.gutter) - 2)

    console.print()
    console.print(Text(parts.header, style=style))
    console.print(Text(parts.location, style="dim"))
    console.print(Text(f"{pad}| ", style="dim"))

    line = Text(parts.gutter, style="dim")
    line.append(parts.before)
    line.append(parts.highlighted, style=style)
    line.append(parts.after)
    console.print(line)
    console.print(Text(parts.underline, style=style))


def print_diagnostics(console: Console, result: CompilationResult):
    for diagnostic in result.diagnostics:
        print_diagnostic(console, diagnostic, result.source, result.filename)


def heading(console: Console, title: str):
    console.print()
    console.print(Text(title, style="bold"))


@click.group()
@click.version_option(__version__, prog_name="stunt")
def cli():
    """stunt compiler."""


@cli.command()
@click.argument("input_file", metavar="INPUT", type=click.Path(exists=True, dir_okay=False))
@click.argument("output_file", metavar="[OUTPUT]", required=False, type=click.Path(dir_okay=False))
@click.option("--verbose", "-v", is_flag=True, help="Log each compiler stage.")
@click.option("--quiet", "-q", is_flag=True, help="Only print diagnostics.")
@click.option("--nested-unused", is_flag=True, help="Report unused variables in every block scope.")
@click.option("--stop-on-warnings", is_flag=True, help="Do not generate code when there are warnings.")
def tokenize(
    input_file: str,
    output_file: Optional[str],
    verbose: bool,
    quiet: bool,
    nested_unused: bool,
    stop_on_warnings: bool,
):
    """Compile INPUT, writing the generated code to OUTPUT if given."""
    _configure_logging(verbose)
    console = Console(highlight=False)
    options = CompilerOptions(report_nested_unused=nested_unused, stop_on_warnings=stop_on_warnings)

    try:
        with open(input_file, "r", encoding="utf-8") as f:
            source = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise click.ClickException(f"Cannot read {input_file}: {e}")

    result = compile_source(source, options, input_file)

    if not quiet:
        console.print(Text("Source code:", style="bold"))
        print_source(console, input_file, source)

    if result.stage == CompilationStage.SCAN:
        print_diagnostics(console, result)
        raise SystemExit(1)

    if not quiet:
        heading(console, "Tokens:")
        print_tokens(console, result.tokens)

    if result.stage == CompilationStage.PARSE:
        print_diagnostics(console, result)
        raise SystemExit(1)

    if not quiet:
        heading(console, "AST:")
        console.print(Text(format_tree(result.program)))

    print_diagnostics(console, result)
    if not result.succeeded:
        raise SystemExit(1)

    if output_file is None:
        console.print("No output file")
        return

    try:
        with open(output_file, "w", encoding="utf-8") as f:
            f.write(result.output)
    except (OSError, UnicodeEncodeError) as e:
        raise click.ClickException(f"Cannot write {output_file}: {e}")

    if not quiet:
        heading(console, "Output code:")
        print_source(console, output_file, result.output)


def main():
    cli()


if __name__ == "__main__":
    main()
