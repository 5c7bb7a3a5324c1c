"""Command line interface for CouchPatch."""

import json
import logging
from pathlib import Path
from typing import Annotated, Any

import typer

from ._settings import settings
from .errors import ErrorKind, JsonPatchError
from .jsonpatch import patch
from .jsonpointer import get
from .version import __version__

EXIT_CODES = {
    ErrorKind.INVALID_PATCH: 3,
    ErrorKind.INVALID_POINTER: 4,
    ErrorKind.PATCH_NOT_APPLICABLE: 5,
}

app = typer.Typer(help="CouchPatch Command Line Interface")


def _load(path: Path) -> Any:
    try:
        return json.loads(path.read_text())
    except (OSError, ValueError) as e:
        typer.secho(f"Cannot read JSON from {path}: {e}", err=True, fg="red")
        raise typer.Exit(1) from e


def _dump(value: Any, indent: int | None) -> str:
    return json.dumps(value, indent=indent, ensure_ascii=settings.ensure_ascii)


def _fail(error: JsonPatchError) -> typer.Exit:
    typer.secho(f"{error.kind}: {error}", err=True, fg="red")
    return typer.Exit(EXIT_CODES[error.kind])


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Annotated[
        bool, typer.Option("--version", is_eager=True, help="Print the app version")
    ] = False,
):
    """CouchPatch Command Line Interface."""
    logging.basicConfig(filename=settings.log_file, level=settings.log_level.upper())
    if version:
        typer.echo(f"CouchPatch v{__version__}")
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


@app.command()
def apply(
    document: Annotated[
        Path,
        typer.Argument(exists=True, dir_okay=False, help="The JSON document"),
    ],
    patch_file: Annotated[
        Path,
        typer.Argument(
            metavar="PATCH",
            exists=True,
            dir_okay=False,
            help="The JSON Patch (an array of operations)",
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            writable=True,
            help="Write the patched document here instead of stdout",
        ),
    ] = None,
    indent: Annotated[
        int | None, typer.Option("--indent", help="Indentation of the output")
    ] = None,
):
    """Apply a JSON Patch to a JSON document."""
    try:
        result = patch(_load(document), _load(patch_file))
    except JsonPatchError as e:
        raise _fail(e) from e
    text = _dump(result, settings.indent if indent is None else indent)
    if output is None:
        typer.echo(text)
    else:
        output.write_text(text + "\n")


@app.command("get")
def get_value(
    document: Annotated[
        Path,
        typer.Argument(exists=True, dir_okay=False, help="The JSON document"),
    ],
    pointer: Annotated[str, typer.Argument(help="JSON Pointer, e.g. /a/0/b")],
):
    """Print the value a JSON Pointer refers to."""
    try:
        value = get(_load(document), pointer)
    except JsonPatchError as e:
        raise _fail(e) from e
    typer.echo(_dump(value, settings.indent))


if __name__ == "__main__":
    app()
