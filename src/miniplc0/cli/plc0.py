"""
plc0 - miniplc0 Compiler Command-Line Interface
===============================================

Usage Examples
--------------
Compile to an instruction listing on stdout:
    $ plc0 prog.pl0

Write the listing to a file:
    $ plc0 prog.pl0 -o prog.s

Show the token stream instead:
    $ plc0 -t prog.pl0

Keep the legacy code shape (no STO after initializers):
    $ plc0 --legacy-store prog.pl0
"""

import logging
from pathlib import Path
from typing import Optional

import click

from miniplc0 import __version__
from miniplc0.cli.errors import handle_cli_exception
from miniplc0.compiler import CompilerOptions, Plc0Compiler
from miniplc0.instructions import format_instructions


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-t", "--tokenize", "mode",
    flag_value="tokenize",
    help="Write the token listing",
)
@click.option(
    "-l", "--analyse", "mode",
    flag_value="analyse",
    default=True,
    help="Write the instruction listing (default)",
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: stdout)",
)
@click.option(
    "--legacy-store",
    is_flag=True,
    help="Do not emit STO after var initializers and first assignments",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="plc0")
def main(
    input_file: Path,
    mode: str,
    output: Optional[Path],
    legacy_store: bool,
    verbose: bool,
) -> None:
    """
    Compile a miniplc0 program to stack machine instructions.

    INPUT_FILE is the program source to compile.

    \b
    Examples:
        plc0 prog.pl0                # Listing to stdout
        plc0 prog.pl0 -o prog.s      # Listing to a file
        plc0 -t prog.pl0             # Token listing
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    options = CompilerOptions.from_env()
    if legacy_store:
        options.store_initializers = False

    try:
        source = input_file.read_text(encoding="utf-8")
        compiler = Plc0Compiler(options)

        if mode == "tokenize":
            tokens = compiler.tokenize_source(source, str(input_file))
            text = "".join(f"{token.format()}\n" for token in tokens)
        else:
            result = compiler.compile_source(source, str(input_file))
            text = format_instructions(result.instructions)
            if verbose:
                click.echo(f"Tokenized: {result.token_count} tokens", err=True)
                click.echo(f"Symbols: {len(result.symbols)}", err=True)

        if output:
            output.write_text(text, encoding="utf-8")
            click.echo(f"Compiled {input_file} -> {output}", err=True)
        else:
            click.echo(text, nl=False)

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
