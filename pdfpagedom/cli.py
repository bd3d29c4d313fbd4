"""
Command-line interface for pdfpagedom.
"""

import os
import sys

import click
from PIL import Image, UnidentifiedImageError
from pypdf import PdfWriter
from rich.console import Console
from rich.table import Table

from pdfpagedom.exceptions import PageDomError
from pdfpagedom.loader import iter_pages, open_reader
from pdfpagedom.model.images import ImageXObject
from pdfpagedom.model.page import Page
from pdfpagedom.model.watermark import WatermarkImageOptions

console = Console()


def _format_box(page: Page) -> str:
    box = page.get_media_box()
    return " ".join(f"{float(value):g}" for value in box)


def _format_rotate(page: Page) -> str:
    try:
        return str(page.get_inherited("/Rotate"))
    except PageDomError:
        return "0"


def _format_categories(page: Page) -> str:
    resources = page.get_resources()
    if resources is None or not resources.categories():
        return "-"
    return ", ".join(category.lstrip("/") for category in resources.categories())


@click.group()
@click.version_option(version="1.0.0")
def cli():
    """
    pdfpagedom - Inspect and edit PDF pages.
    """
    pass


@cli.command(name="inspect")
@click.argument('input_pdf', type=click.Path(exists=True))
def inspect_pages(input_pdf):
    """
    Show the effective attributes of every page.

    Examples:

        pdfpagedom inspect input.pdf
    """
    try:
        reader = open_reader(input_pdf)

        table = Table(title=f"Pages: {os.path.basename(input_pdf)}")
        table.add_column("Page", style="cyan", no_wrap=True)
        table.add_column("MediaBox", style="green")
        table.add_column("Rotate", style="green")
        table.add_column("Annotations", style="green")
        table.add_column("Content segments", style="green")
        table.add_column("Resources", style="green")

        for number, page in enumerate(iter_pages(reader), start=1):
            table.add_row(
                str(number),
                _format_box(page),
                _format_rotate(page),
                str(len(page.annotations or ())),
                str(len(page.get_content_streams())),
                _format_categories(page),
            )

        console.print()
        console.print(table)
        console.print()

    except (PageDomError, FileNotFoundError) as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)


@cli.command(name="contents")
@click.argument('input_pdf', type=click.Path(exists=True))
@click.option(
    '--page', '-p', 'page_number',
    default=1,
    help='Page number (1-based)',
    type=int
)
def show_contents(input_pdf, page_number):
    """
    Print the content stream instructions of one page.

    Examples:

        pdfpagedom contents input.pdf

        pdfpagedom contents input.pdf --page 3
    """
    try:
        reader = open_reader(input_pdf)
        total = len(reader.pages)
        if page_number < 1 or page_number > total:
            console.print(f"[bold red]✗ Error:[/bold red] Page {page_number} out of range (1-{total})")
            sys.exit(1)

        page = Page.from_dict(reader.pages[page_number - 1])
        click.echo(page.get_all_content_streams())

    except (PageDomError, FileNotFoundError) as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)


@cli.command(name="watermark")
@click.argument('input_pdf', type=click.Path(exists=True))
@click.argument('image_file', type=click.Path(exists=True))
@click.option(
    '--output', '-o',
    required=True,
    help='Output PDF file',
    type=click.Path()
)
@click.option(
    '--alpha',
    default=1.0,
    help='Watermark opacity between 0 and 1',
    type=click.FloatRange(0.0, 1.0)
)
@click.option('--fit-to-width', is_flag=True, help='Stretch the image across the page width')
@click.option('--preserve-aspect-ratio', is_flag=True, help='Keep the image aspect ratio')
def add_watermark(input_pdf, image_file, output, alpha, fit_to_width, preserve_aspect_ratio):
    """
    Draw an image over every page.

    Examples:

        pdfpagedom watermark input.pdf logo.png -o stamped.pdf

        pdfpagedom watermark input.pdf logo.png -o stamped.pdf --alpha 0.3 --fit-to-width
    """
    try:
        open_reader(input_pdf)
        try:
            with Image.open(image_file) as source:
                image = ImageXObject.from_pil(source)
        except (UnidentifiedImageError, OSError) as e:
            console.print(f"[bold red]✗ Error:[/bold red] Unable to read image: {e}")
            sys.exit(1)

        options = WatermarkImageOptions(
            alpha=alpha,
            fit_to_width=fit_to_width,
            preserve_aspect_ratio=preserve_aspect_ratio,
        )

        writer = PdfWriter(clone_from=input_pdf)
        for page_object in writer.pages:
            page = Page.from_dict(page_object)
            page.add_watermark_image(image, options)
            page.bind(writer)

        with open(output, "wb") as handle:
            writer.write(handle)

        console.print(f"\n[bold green]✓ Watermarked {len(writer.pages)} page(s):[/bold green] {output}")
        console.print()

    except (PageDomError, FileNotFoundError) as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)


if __name__ == '__main__':
    cli()
