"""
Command-line interface for pdfrasterx.
"""

import logging
import os
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from pdfrasterx import __version__
from pdfrasterx.converter import convert_from_path
from pdfrasterx.exceptions import PDFRasterXError
from pdfrasterx.formats import ImageFormat
from pdfrasterx.options import DEFAULT_DPI, POPPLER_PATH_ENV, ConversionOptions
from pdfrasterx.pdfinfo import pdfinfo_from_path
from pdfrasterx.utils import sizeof_fmt

console = Console()


def configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("pdfrasterx")
    logger.handlers.clear()
    logger.addHandler(RichHandler(console=Console(stderr=True), markup=False, show_time=False))
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _fail(error: Exception) -> None:
    console.print(f"\n[bold red]✗ Error:[/bold red] {error}")
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
def cli():
    """
    pdfrasterx - Render PDF pages to PNG, JPEG or TIFF images with Poppler.
    """
    pass


@cli.command(name="info")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option('--user-password', help='User password for encrypted PDFs', type=str)
@click.option('--owner-password', help='Owner password for encrypted PDFs', type=str)
@click.option(
    '--poppler-path',
    envvar=POPPLER_PATH_ENV,
    help='Directory containing the Poppler binaries',
    type=click.Path(file_okay=False),
)
def show_info(input_pdf, user_password, owner_password, poppler_path):
    """
    Display the pdfinfo fields of a PDF file.

    Example:

        pdfrasterx info input.pdf
    """
    try:
        info = pdfinfo_from_path(
            input_pdf,
            user_password=user_password,
            owner_password=owner_password,
            poppler_path=poppler_path,
        )
    except PDFRasterXError as e:
        _fail(e)

    table = Table(title=f"PDF Information: {os.path.basename(input_pdf)}")
    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")
    for key, value in info.items():
        table.add_row(key, str(value))

    console.print()
    console.print(table)
    console.print()


@cli.command(name="convert")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--output-dir', '-o',
    required=True,
    help='Directory the rendered images are written to',
    type=click.Path(file_okay=False),
)
@click.option(
    '--format', '-f', 'fmt',
    default=ImageFormat.PNG.value,
    type=click.Choice([item.value for item in ImageFormat], case_sensitive=False),
    help='Output image format',
)
@click.option('--dpi', '-r', default=DEFAULT_DPI, show_default=True, type=int, help='Rendering resolution')
@click.option('--first-page', type=int, help='First page to render (1-indexed)')
@click.option('--last-page', type=int, help='Last page to render (1-indexed, inclusive)')
@click.option('--concurrency', '-j', default=1, show_default=True, type=int, help='Number of rasterizer processes')
@click.option('--cropbox', is_flag=True, help='Use the crop box instead of the media box')
@click.option('--transparent', is_flag=True, help='Transparent page background (PNG and TIFF only)')
@click.option('--gray', 'grayscale', is_flag=True, help='Render in grayscale')
@click.option('--width', type=int, help='Scale images to this width in pixels')
@click.option('--height', type=int, help='Scale images to this height in pixels')
@click.option('--hide-annotations', is_flag=True, help='Do not render annotations')
@click.option('--user-password', help='User password for encrypted PDFs', type=str)
@click.option('--owner-password', help='Owner password for encrypted PDFs', type=str)
@click.option(
    '--poppler-path',
    envvar=POPPLER_PATH_ENV,
    help='Directory containing the Poppler binaries',
    type=click.Path(file_okay=False),
)
@click.option('--verbose', '-v', is_flag=True, help='Show debug logging')
def convert(input_pdf, output_dir, fmt, dpi, first_page, last_page, concurrency, cropbox,
            transparent, grayscale, width, height, hide_annotations, user_password,
            owner_password, poppler_path, verbose):
    """
    Render PDF pages into image files.

    Examples:

        pdfrasterx convert input.pdf -o pages

        pdfrasterx convert input.pdf -o pages --format jpeg -j 4

        pdfrasterx convert input.pdf -o pages --first-page 3 --last-page 5 --width 800
    """
    configure_logging(verbose)
    options = ConversionOptions(
        dpi=dpi,
        fmt=fmt,
        concurrency=concurrency,
        first_page=first_page,
        last_page=last_page,
        use_cropbox=cropbox,
        transparent=transparent,
        grayscale=grayscale,
        width=width,
        height=height,
        hide_annotations=hide_annotations,
        user_password=user_password,
        owner_password=owner_password,
        output_folder=output_dir,
        poppler_path=poppler_path,
    )

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            progress.add_task(f"Rendering {os.path.basename(input_pdf)}...", total=None)
            images = convert_from_path(input_pdf, options)
    except PDFRasterXError as e:
        _fail(e)

    summary = Table(title="Conversion Summary", show_header=False)
    summary.add_column("Metric", style="cyan")
    summary.add_column("Value", style="green")
    summary.add_row("File", os.path.basename(input_pdf))
    summary.add_row("Format", fmt.lower())
    summary.add_row("Images", str(len(images)))
    summary.add_row("Total Size", sizeof_fmt(sum(len(image) for image in images)))
    summary.add_row("Output Directory", os.path.abspath(output_dir))

    console.print(f"\n[bold green]✓ Rendered {len(images)} image(s)[/bold green]")
    console.print(summary)
    console.print()


if __name__ == '__main__':
    cli()
