"""CLI entrypoints for building compiled-help projects."""

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .builder import ChmBuilder
from .config import Book, load_book, load_render_context
from .errors import ChmError
from .language import DEFAULT_LANGUAGE_CODE, LANGUAGES

console = Console()
app = typer.Typer(help="Convert Markdown books into HTML Help (CHM) projects.")

VerboseFlag = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Log every processed and written file."),
]


@app.command()
def build(
    book_path: Annotated[
        Path | None,
        typer.Argument(help="Book file (book.yml) or a directory containing one."),
    ] = None,
    context: Annotated[
        Path | None,
        typer.Option(
            "--context",
            "-x",
            help="mdBook render context JSON. Read from stdin when no book is given.",
        ),
    ] = None,
    no_compile: Annotated[
        bool,
        typer.Option("--no-compile", help="Write the project without running hhc.exe."),
    ] = False,
    verbose: VerboseFlag = False,
) -> None:
    """Render every chapter, write the project files and compile the CHM."""
    _configure_logging(verbose)
    try:
        book = _load(book_path, context)
        builder = ChmBuilder.from_book(book)
        if no_compile or not book.chm.compile:
            written = builder.write()
            console.print(
                f"[bold green]Project written[/]: {builder.project_path} "
                f"({len(written)} file(s))"
            )
            return
        status = builder.compile()
    except ChmError as exc:
        console.print(f"[bold red]Could not build CHM[/]: {exc}")
        raise typer.Exit(code=1) from exc

    console.print(
        f"[bold green]CHM compiled[/]: {builder.output_path} (compiler exit status {status})"
    )


@app.command()
def languages() -> None:
    """List the language codes accepted by ``language-code``."""
    table = Table(title="HTML Help languages")
    table.add_column("Code")
    table.add_column("LCID")
    table.add_column("Name")
    for code, (lcid, name) in sorted(LANGUAGES.items()):
        marker = " (default)" if code == DEFAULT_LANGUAGE_CODE else ""
        table.add_row(code, f"{lcid:x}", f"{name}{marker}")
    console.print(table)


def mdbook_main() -> None:
    """Entry point used as an mdBook ``[output.chm]`` renderer command."""
    app(args=["build"])


def _load(book_path: Path | None, context: Path | None) -> Book:
    if book_path is not None:
        return load_book(book_path)
    if context is not None and str(context) != "-":
        try:
            text = context.read_text(encoding="utf-8")
        except OSError as exc:
            raise ChmError(f"Unable to read render context {context}: {exc.strerror}") from exc
        return load_render_context(text)
    return load_render_context(sys.stdin.read())


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
