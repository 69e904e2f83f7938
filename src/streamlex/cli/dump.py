"""
streamlex - Token Dump Command-Line Interface
=============================================

Prints the token stream of a source file, one token per line:

    line<TAB>kind<TAB>tag<TAB>value

Usage Examples
--------------
Dump a file:
    $ streamlex program.txt

Read from standard input:
    $ echo "a <= 10" | streamlex -

Reject control characters and wrap oversized integers:
    $ streamlex --strict --overflow wrap program.txt

Verbose mode (debug logging of buffer refills and tokens):
    $ streamlex -v program.txt

Defaults for every option can also be set through the STREAMLEX_*
environment variables read by LexerConfig.from_env().

Copyright (c) 2026 streamlex Contributors
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

import click

from streamlex import __version__
from streamlex.cli.errors import handle_cli_exception
from streamlex.config import LexerConfig, OverflowPolicy
from streamlex.lexer import Lexer
from streamlex.tokens import END_OF_INPUT, Token


logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def format_token(token: Token, line: int) -> str:
    """Render a token as a tab-separated dump line."""
    return f"{line}\t{token.kind}\t{int(token.tag)}\t{token.text}"


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, allow_dash=True, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: stdout)",
)
@click.option(
    "--strict/--permissive",
    default=None,
    help="Reject unprintable characters instead of emitting them as operators",
)
@click.option(
    "--floats/--no-floats",
    default=None,
    help="Recognize fractional literals such as 3.14, 2. and .5",
)
@click.option(
    "--overflow",
    type=click.Choice([policy.value for policy in OverflowPolicy], case_sensitive=False),
    default=None,
    help="Policy for integer literals beyond 64 bits. Default: error",
)
@click.option(
    "--chunk-size",
    type=click.IntRange(min=1),
    default=None,
    help="Characters or bytes read from the input per buffer refill",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="streamlex")
def main(
    input_file: Path,
    output: Optional[Path],
    strict: Optional[bool],
    floats: Optional[bool],
    overflow: Optional[str],
    chunk_size: Optional[int],
    verbose: bool,
) -> None:
    """
    Dump the tokens of a source file.

    INPUT_FILE is the file to tokenize, or - for standard input.

    \b
    Examples:
        streamlex prog.txt             # Tokens to stdout
        streamlex prog.txt -o out.tsv  # Tokens to a file
        streamlex --no-floats -        # Integers only, from stdin
    """
    setup_logging(verbose)

    config = LexerConfig.from_env()
    if strict is not None:
        config = replace(config, strict=strict)
    if floats is not None:
        config = replace(config, float_literals=floats)
    if overflow is not None:
        config = replace(config, overflow=OverflowPolicy(overflow.lower()))
    if chunk_size is not None:
        config = replace(config, chunk_size=chunk_size)

    logger.debug(f"Configuration: {config}")

    try:
        if str(input_file) == "-":
            lexer = Lexer(click.get_binary_stream("stdin"), config=config, filename="<stdin>")
        else:
            lexer = Lexer.from_file(input_file, config=config)

        count = 0
        try:
            with click.open_file(str(output) if output else "-", "w") as out:
                for token in lexer.tokenize():
                    line = lexer.line if token is END_OF_INPUT else token.line
                    out.write(format_token(token, line) + "\n")
                    count += 1
        finally:
            if str(input_file) != "-":
                lexer.close()

        if verbose:
            click.echo(f"{count} token(s), ended on line {lexer.line}", err=True)

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
