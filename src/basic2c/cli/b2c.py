"""
b2c - BASIC to C Command-Line Interface
=======================================

This module implements the command-line interface for the translator.

Usage Examples
--------------
Basic translation:
    $ b2c hello.bas

With output file:
    $ b2c hello.bas -o hello.c

Print the C code instead of writing it:
    $ b2c --stdout hello.bas

Dump the token stream:
    $ b2c --tokens hello.bas

Full pipeline to a native binary:
    $ b2c hello.bas && cc hello.c -o hello
"""

import logging
from pathlib import Path
from typing import Optional

import click

from basic2c import __version__
from basic2c.io import read_text
from basic2c.compiler import BasicCompiler, CompilerOptions, Scanner
from basic2c.compiler.compiler import MAX_PRINT_PRECISION, OUTPUT_SUFFIX
from basic2c.cli.errors import handle_cli_exception

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output C file (default: input.c)",
)
@click.option(
    "-p", "--precision",
    type=click.IntRange(0, MAX_PRINT_PRECISION),
    default=2,
    show_default=True,
    help="Digits after the decimal point when PRINT shows a number",
)
@click.option(
    "--stdout",
    "to_stdout",
    is_flag=True,
    help="Print the generated C to stdout instead of writing a file",
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Print the token stream and exit (for debugging)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="b2c")
def main(
    input_file: Path,
    output: Optional[Path],
    precision: int,
    to_stdout: bool,
    tokens: bool,
    verbose: bool,
) -> None:
    """
    Translate a BASIC program to C.

    INPUT_FILE is the BASIC source file (.bas) to translate.

    \b
    Examples:
        b2c hello.bas                # Outputs hello.c
        b2c hello.bas -o out.c       # Specify output file
        b2c -p 4 hello.bas           # PRINT numbers with 4 decimals
        b2c --stdout hello.bas       # Print C to the terminal
        b2c --tokens hello.bas       # Show tokens

    \b
    Supported statements:
        PRINT "text" | PRINT expression
        INPUT var, LET var = expression
        IF cond THEN ... ENDIF
        WHILE cond REPEAT ... ENDWHILE
        LABEL name, GOTO name
    """
    setup_logging(verbose)

    if output is None:
        output = input_file.with_suffix(OUTPUT_SUFFIX)

    try:
        options = CompilerOptions(print_precision=precision)

        if verbose:
            click.echo(f"Translating {input_file}...")

        compiler = BasicCompiler(options)

        # Token dump mode
        if tokens:
            source = read_text(input_file, encoding=options.encoding)
            for token in Scanner(source, str(input_file)).tokenize():
                click.echo(repr(token))
            return

        if to_stdout:
            source = read_text(input_file, encoding=options.encoding)
            result = compiler.compile_source(source, str(input_file))
            click.echo(result.code, nl=False)
            return

        result = compiler.compile_file(input_file, output)

        if verbose:
            click.echo(f"Wrote {len(result.code)} bytes to {output}")
            click.echo(f"Tokenized: {result.token_count} tokens")
            click.echo(
                f"Declared: {len(result.variables)} variables, "
                f"{len(result.labels)} labels"
            )

        click.echo(f"Compiled {input_file} -> {output}")

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
