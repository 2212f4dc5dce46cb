"""Fan in worker results into the final ordered image list."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .exceptions import PDFConversionError
from .sinks import OutputSink
from .types import WorkerResult

_LOGGER = logging.getLogger("pdfrasterx.aggregator")

# Poppler reports malformed-but-renderable content with this prefix.
RECOVERABLE_STDERR_MARKER = "Syntax Error"


def is_recoverable_stderr(stderr: str) -> bool:
    return RECOVERABLE_STDERR_MARKER in stderr


def check_worker_stderr(result: WorkerResult) -> None:
    """Raise :class:`PDFConversionError` if *result* reported a fatal error.

    Any non-empty stderr without the recoverable marker counts as fatal.
    This is strict: locale specific or purely informational tool messages
    also abort the conversion.
    """

    if not result.stderr:
        return
    if is_recoverable_stderr(result.stderr):
        _LOGGER.warning(
            "Recoverable syntax error while rendering %s: %s",
            result.page_range.label(),
            result.stderr.strip(),
        )
        return
    raise PDFConversionError(
        f"Error converting PDF to images ({result.page_range.label()}): {result.stderr.strip()}",
        page_range=result.page_range,
        stderr=result.stderr,
    )


def aggregate_results(results: Sequence[WorkerResult], sink: OutputSink) -> list[bytes]:
    """Merge per-worker output into one list ordered by range index."""

    images: list[bytes] = []
    for result in sorted(results, key=lambda item: item.index):
        check_worker_stderr(result)
        collected = sink.collect(result)
        _LOGGER.debug("Collected %d image(s) for %s", len(collected), result.page_range.label())
        images.extend(collected)
    return images


__all__ = [
    "RECOVERABLE_STDERR_MARKER",
    "is_recoverable_stderr",
    "check_worker_stderr",
    "aggregate_results",
]
