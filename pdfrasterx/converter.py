"""Conversion engine for :mod:`pdfrasterx`."""

from __future__ import annotations

import asyncio
import logging
import os

from .aggregator import aggregate_results
from .exceptions import InvalidPageRangeError
from .formats import get_format_spec
from .invocation import build_invocation
from .options import ConversionOptions
from .partition import partition_pages
from .pdfinfo import PAGES_FIELD, pdfinfo_from_path
from .sinks import open_sink
from .supervisor import run_workers
from .utils import resolve_path, staged_pdf

_LOGGER = logging.getLogger("pdfrasterx")


def _check_requested_window(options: ConversionOptions) -> None:
    first, last = options.first_page, options.last_page
    if first is not None and first < 1:
        raise InvalidPageRangeError(first, last if last is not None else first)
    if first is not None and last is not None and first > last:
        raise InvalidPageRangeError(first, last)


def _resolve_window(options: ConversionOptions, page_count: int) -> tuple[int, int]:
    first = options.first_page if options.first_page is not None else 1
    last = options.last_page if options.last_page is not None else page_count
    last = min(last, page_count)
    if first < 1 or first > last:
        raise InvalidPageRangeError(first, last, page_count)
    return first, last


async def convert_from_path_async(
    pdf_path: str | os.PathLike[str],
    options: ConversionOptions | None = None,
) -> list[bytes]:
    """Render the pages of *pdf_path* into image byte buffers.

    The requested window is split across ``options.concurrency`` rasterizer
    processes. Images are returned in page order regardless of which
    process finishes first.

    Raises
    ------
    UnsupportedFormatError
        Before any process is started, if ``options.fmt`` is unknown.
    PopplerNotInstalledError
        If a Poppler executable cannot be launched.
    PDFInfoError
        If the page count cannot be determined.
    InvalidPageRangeError
        If the first page lies outside ``1..last``. An explicit window with
        ``first_page > last_page`` is rejected before :command:`pdfinfo` runs.
    PDFConversionError
        If any worker reports a fatal error. No partial result is returned.
    """

    options = options or ConversionOptions()
    spec = get_format_spec(options.fmt)
    _check_requested_window(options)
    source = resolve_path(pdf_path)

    # pdfinfo rejects a window starting past the last page, so it is
    # queried for the whole document and the window is checked here.
    info = await asyncio.to_thread(
        pdfinfo_from_path,
        source,
        user_password=options.user_password,
        owner_password=options.owner_password,
        poppler_path=options.poppler_path,
    )
    page_count = int(info[PAGES_FIELD])
    first, last = _resolve_window(options, page_count)
    page_ranges = partition_pages(first, last, max(options.concurrency, 1))

    _LOGGER.info(
        "Converting %s pages %d-%d to %s with %d worker(s)",
        source.name,
        first,
        last,
        spec.format.value,
        len(page_ranges),
    )

    with open_sink(spec, options.output_folder) as sink:
        invocations = [
            build_invocation(source, page_range, index, options, spec, sink)
            for index, page_range in enumerate(page_ranges)
        ]
        results = await run_workers(invocations)
        images = aggregate_results(results, sink)

    _LOGGER.info("Converted %s into %d image(s)", source.name, len(images))
    return images


def convert_from_path(
    pdf_path: str | os.PathLike[str],
    options: ConversionOptions | None = None,
) -> list[bytes]:
    """Synchronous wrapper around :func:`convert_from_path_async`."""

    return asyncio.run(convert_from_path_async(pdf_path, options))


async def convert_from_bytes_async(
    data: bytes,
    options: ConversionOptions | None = None,
) -> list[bytes]:
    """Render an in-memory PDF, staging it to a temporary file first."""

    with staged_pdf(data) as path:
        return await convert_from_path_async(path, options)


def convert_from_bytes(
    data: bytes,
    options: ConversionOptions | None = None,
) -> list[bytes]:
    """Synchronous wrapper around :func:`convert_from_bytes_async`."""

    return asyncio.run(convert_from_bytes_async(data, options))


__all__ = [
    "convert_from_path",
    "convert_from_path_async",
    "convert_from_bytes",
    "convert_from_bytes_async",
]
