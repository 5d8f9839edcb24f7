"""
Command-line interface for pdfdirmerge.
"""

from __future__ import annotations

import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .. import __version__
from ..core.utils import configure_logging
from ..tools import load_builtin_plugins
from ..tools.merger.commands import count_pdfs_command, merge_directory_command, preview_directory_command

console = Console()


def _fail(message: str) -> None:
    console.print(f"[bold red]✗ Error:[/bold red] {escape(message)}")
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """
    pdfdirmerge - Merge every PDF in a directory into one file.
    """
    configure_logging(verbose)
    load_builtin_plugins()


@cli.command(name="merge")
@click.argument("directory", type=click.Path())
@click.option(
    "--no-atomic",
    is_flag=True,
    help="Write straight to the output path instead of replacing it atomically",
)
def merge(directory, no_atomic):
    """
    Merge the PDFs of DIRECTORY into <parent>/<DIRECTORY>.pdf.

    Files are merged in ascending modification time order.

    Example:

        pdfdirmerge merge ./scans
    """
    with console.status("[bold cyan]Merging PDFs...[/bold cyan]"):
        result = merge_directory_command(directory, atomic=not no_atomic)
    if not result.ok:
        _fail(result.message)
    console.print(f"[bold green]✓ {escape(result.message)}[/bold green]")


@cli.command(name="count")
@click.argument("directory", type=click.Path())
def count(directory):
    """
    Count the PDF files that a merge of DIRECTORY would include.
    """
    result = count_pdfs_command(directory)
    if not result.ok:
        _fail(result.message)
    console.print(result.value)


@cli.command(name="preview")
@click.argument("directory", type=click.Path())
def preview(directory):
    """
    Show the files of DIRECTORY in merge order with their page counts.
    """
    result = preview_directory_command(directory)
    if not result.ok:
        _fail(result.message)

    table = Table(title="Merge order")
    table.add_column("#", style="dim", justify="right")
    table.add_column("File", style="cyan")
    table.add_column("Modified", style="green")
    table.add_column("Pages", justify="right")
    for index, entry in enumerate(result.value, start=1):
        table.add_row(
            str(index),
            escape(entry["path"].name),
            entry["modified"].strftime("%Y-%m-%d %H:%M:%S"),
            str(entry["pages"]),
        )

    console.print(table)
    console.print(f"[dim]{escape(result.message)}[/dim]")


def main() -> None:  # pragma: no cover - console script entry point
    cli()


if __name__ == "__main__":  # pragma: no cover
    main()
