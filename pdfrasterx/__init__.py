"""
pdfrasterx - render PDF pages to images with Poppler.

Pages are rasterized by ``pdftoppm``/``pdftocairo`` processes running
concurrently over contiguous page ranges. Their output is reassembled into
one list of image byte buffers in page order.

Quick Start:
    >>> from pdfrasterx import ConversionOptions, convert_from_path
    >>> images = convert_from_path("input.pdf", ConversionOptions(fmt="jpeg", concurrency=4))

For CLI usage, use the 'pdfrasterx' command after installation.
"""

from __future__ import annotations

from .converter import (
    convert_from_bytes,
    convert_from_bytes_async,
    convert_from_path,
    convert_from_path_async,
)
from .demux import split_jpeg_stream, split_png_stream, split_stream
from .exceptions import (
    InvalidPageRangeError,
    PDFConversionError,
    PDFInfoError,
    PDFRasterXError,
    PopplerNotInstalledError,
    UnsupportedFormatError,
)
from .formats import ImageFormat
from .options import ConversionOptions
from .partition import PageRange, partition_pages
from .pdfinfo import pdfinfo_from_bytes, pdfinfo_from_path

__version__ = "1.0.0"

__all__ = [
    "convert_from_path",
    "convert_from_path_async",
    "convert_from_bytes",
    "convert_from_bytes_async",
    "pdfinfo_from_path",
    "pdfinfo_from_bytes",
    "split_stream",
    "split_jpeg_stream",
    "split_png_stream",
    "partition_pages",
    "PageRange",
    "ImageFormat",
    "ConversionOptions",
    "PDFRasterXError",
    "PopplerNotInstalledError",
    "PDFInfoError",
    "PDFConversionError",
    "UnsupportedFormatError",
    "InvalidPageRangeError",
    "__version__",
]
