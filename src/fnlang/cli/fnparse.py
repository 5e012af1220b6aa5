"""
fnparse - fnlang Front-End Command-Line Interface
=================================================

This module implements the command-line interface for the fnlang
tokenizer and parser.

Usage Examples
--------------
Print the AST as an indented tree:
    $ fnparse prog.fn

Print the AST as JSON into a file:
    $ fnparse prog.fn --format json -o prog.json

Print the token stream only:
    $ fnparse --tokens prog.fn

Verbose mode:
    $ fnparse -v prog.fn
"""

from pathlib import Path
from typing import Optional
import json
import logging

import click

from fnlang import __version__
from fnlang.cli.errors import handle_cli_exception
from fnlang.frontend.ast import ASTPrinter, to_dict
from fnlang.frontend.lexer import Token
from fnlang.frontend.pipeline import Frontend, FrontendOptions


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write output to a file instead of stdout",
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Print the token stream and exit",
)
@click.option(
    "-f", "--format", "output_format",
    type=click.Choice(["tree", "json"], case_sensitive=False),
    default="tree",
    show_default=True,
    help="AST output format",
)
@click.option(
    "--wrap-constants",
    is_flag=True,
    help="Wrap integer constants above 2147483647 to 32 bits instead of failing",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="fnparse")
def main(
    input_file: Path,
    output: Optional[Path],
    tokens: bool,
    output_format: str,
    wrap_constants: bool,
    verbose: bool,
) -> None:
    """
    Tokenize and parse an fnlang source file.

    INPUT_FILE is the fnlang source file to parse.

    \b
    Examples:
        fnparse prog.fn                  # Print the AST tree
        fnparse prog.fn -f json          # Print the AST as JSON
        fnparse --tokens prog.fn         # Print tokens only
        fnparse prog.fn -o prog.ast      # Write to a file
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    source = None
    try:
        source = input_file.read_text(encoding="utf-8")

        options = FrontendOptions(
            filename=str(input_file),
            wrap_constants=wrap_constants,
            tokens_only=tokens,
        )
        result = Frontend(options).run(source)
        if result.error is not None:
            raise result.error

        if tokens:
            text = "\n".join(format_token(token) for token in result.tokens)
        elif output_format.lower() == "json":
            text = json.dumps(to_dict(result.ast), indent=2)
        else:
            text = ASTPrinter().print(result.ast)

        if output is not None:
            output.write_text(text + "\n", encoding="utf-8")
        else:
            click.echo(text)

        if verbose:
            click.echo(f"Tokenized: {result.token_count} tokens", err=True)
            if result.ast is not None:
                click.echo(f"Parsed: {result.declaration_count} declarations", err=True)
            if output is not None:
                click.echo(f"Wrote {output}", err=True)

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, source=source)


def format_token(token: Token) -> str:
    """Format a token as 'line:column  TYPE  text' for --tokens output."""
    position = f"{token.line}:{token.column}"
    return f"{position:<8} {token.type.name:<11} {token.text}"


if __name__ == "__main__":
    main()
