"""
Command-line interface for pdfrenderx.
"""

import logging
import os
import sys

import click
from rich.console import Console
from rich.table import Table

from pdfrenderx import __version__
from pdfrenderx.config import get_settings
from pdfrenderx.converter import Converter
from pdfrenderx.exceptions import PDFRenderXError
from pdfrenderx.types import FromFile, FromHtml, ModifyPermission, Orientation, PrintPermission
from pdfrenderx.utils import format_file_size, get_logger
from pdfrenderx.validators import detect_tools, get_pdf_info

console = Console(stderr=True)

SIDES = ("top", "bottom", "left", "right")


def _choices(enum_cls):
    return click.Choice([member.value for member in enum_cls])


def _build_margin(margin, sides):
    """Turn ``--margin`` and ``--margin-<side>`` values into a margin option."""
    given = {side: value for side, value in zip(SIDES, sides) if value is not None}
    if margin and given:
        raise click.UsageError("--margin cannot be combined with --margin-<side> options")
    if given:
        return given
    if not margin:
        return None
    values = [value.strip() for value in margin.split(",")]
    if len(values) == 1:
        return values[0]
    return values


def _read_input(source, inline):
    if source == "-":
        return FromHtml(click.get_text_stream("stdin").read())
    if inline:
        return FromHtml(source)
    return FromFile(source)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Log every tool invocation')
def cli(verbose):
    """
    pdfrenderx - Turn HTML into PDF using wkhtmltopdf, exiftool and qpdf.
    """
    if verbose:
        get_logger().setLevel(logging.DEBUG)


@cli.command(name="convert")
@click.argument('source')
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Destination PDF (default: a temporary file)')
@click.option('--html', 'inline', is_flag=True, help='Treat SOURCE as inline HTML instead of a file path')
@click.option('--stdout', 'to_stdout', is_flag=True, help='Write the PDF bytes to standard output')
@click.option('--author', help='Author metadata')
@click.option('--keyword', 'keywords', multiple=True, help='Keyword metadata (repeatable)')
@click.option('--subject', help='Subject metadata')
@click.option('--title', help='Title metadata')
@click.option('--dpi', type=int, help='Rendering DPI')
@click.option('--margin', help='Margin for all sides, or top,right,bottom,left')
@click.option('--margin-top', help='Top margin')
@click.option('--margin-bottom', help='Bottom margin')
@click.option('--margin-left', help='Left margin')
@click.option('--margin-right', help='Right margin')
@click.option('--orientation', type=_choices(Orientation), help='Page orientation')
@click.option('--page-size', help='Page size, e.g. A4 or Letter')
@click.option('--page-height', help='Page height, e.g. 297mm')
@click.option('--page-width', help='Page width, e.g. 210mm')
@click.option('--password', help='Password required to open the PDF')
@click.option('--edit-password', help='Password required to change permissions')
@click.option('--modify', type=_choices(ModifyPermission), help='Allowed modifications (default: annotate)')
@click.option('--print', 'print_', type=_choices(PrintPermission), help='Allowed printing (default: full)')
@click.option('--validate', is_flag=True, help='Check the result is a readable PDF')
def convert(source, output, inline, to_stdout, author, keywords, subject, title, dpi, margin,
            margin_top, margin_bottom, margin_left, margin_right, orientation, page_size,
            page_height, page_width, password, edit_password, modify, print_, validate):
    """
    Convert an HTML file (or inline HTML) into a PDF.

    Examples:

        pdfrenderx convert page.html -o page.pdf

        pdfrenderx convert --html '<h1>Hi</h1>' --title Greeting --stdout > hi.pdf

        pdfrenderx convert page.html --margin 10,20,10,20 --password secret
    """
    options = {
        "author": author,
        "keywords": list(keywords) or None,
        "subject": subject,
        "title": title,
        "dpi": dpi,
        "margin": _build_margin(margin, (margin_top, margin_bottom, margin_left, margin_right)),
        "orientation": orientation,
        "page_size": page_size,
        "page_height": page_height,
        "page_width": page_width,
        "password": password,
        "edit_password": edit_password,
        "modify": modify,
        "print": print_,
    }

    converter = Converter(get_settings())
    data = _read_input(source, inline)

    if to_stdout:
        result = converter.to_binary(data, options, validate=validate)
        if not result.success:
            console.print(f"[bold red]✗ Error:[/bold red] {result.error}")
            sys.exit(1)
        click.get_binary_stream("stdout").write(result.value)
        return

    result = converter.to_file(data, options, output=output, validate=validate)
    if not result.success:
        console.print(f"[bold red]✗ Error:[/bold red] {result.error}")
        sys.exit(1)

    console.print(f"[bold green]✓ PDF created[/bold green] ({format_file_size(os.path.getsize(result.value))})")
    click.echo(str(result.value))


@cli.command(name="tools")
def show_tools():
    """
    Show which external tools can be found.

    Exits with status 1 when any of them is missing.
    """
    found = detect_tools(get_settings())

    table = Table(title="External Tools")
    table.add_column("Tool", style="cyan", no_wrap=True)
    table.add_column("Executable", style="green")

    for tool, executable in found.items():
        table.add_row(tool, executable or "[red]not found[/red]")

    console.print(table)
    if not all(found.values()):
        sys.exit(1)


@cli.command(name="info")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option('--password', help='Password for encrypted PDFs')
def show_info(input_pdf, password):
    """
    Display information about a PDF file.

    Example:

        pdfrenderx info output.pdf
    """
    try:
        info = get_pdf_info(input_pdf, password=password)
    except PDFRenderXError as e:
        console.print(f"[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)

    table = Table(title=f"PDF Information: {os.path.basename(input_pdf)}")
    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")

    table.add_row("File Size", format_file_size(info.file_size))
    table.add_row("Pages", "?" if info.num_pages is None else str(info.num_pages))
    table.add_row("Encrypted", "Yes" if info.is_encrypted else "No")
    for label, value in (("Title", info.title), ("Author", info.author),
                         ("Subject", info.subject), ("Keywords", info.keywords)):
        if value:
            table.add_row(label, str(value))

    console.print(table)


if __name__ == '__main__':
    cli()
