"""
protoc-gen-errors command line entry point.

protoc runs the plugin with no arguments, a CodeGeneratorRequest on stdin and
expects the CodeGeneratorResponse on stdout:

    protoc -I . -I <site-packages> --errors_out=. \\
        --errors_opt=new_errors_func=myapp.errors;make_error errors.proto
"""

from __future__ import annotations

import logging
import os
import sys

import typer

from errgen._version import get_version
from errgen.core.errors import ErrgenError
from errgen.emitter import GENERATOR_NAME
from errgen.plugin import run

LOG_LEVEL_ENV = "ERRGEN_LOG_LEVEL"

app = typer.Typer(
    help="protoc plugin generating Python error enums",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print the plugin version and exit."""
    if value:
        typer.echo(f"{GENERATOR_NAME} {get_version()}")
        raise typer.Exit()


def configure_logging() -> None:
    # Log to stderr to avoid interfering with the response on stdout
    level = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        stream=sys.stderr,
        format="[%(asctime)s] %(name)s - %(levelname)s - %(message)s",
    )


@app.command()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Print the version and exit",
    ),
) -> None:
    """
    Read a CodeGeneratorRequest from stdin and write the response to stdout.
    """
    configure_logging()
    try:
        run(sys.stdin.buffer, sys.stdout.buffer)
    except ErrgenError as e:
        typer.echo(f"{GENERATOR_NAME}: {e}", err=True)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
