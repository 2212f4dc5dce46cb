"""Split concatenated rasterizer output into individual images.

``pdftoppm`` writes every rendered page to standard output back to back,
with no length prefix or separator. Each format is framed by its own
trailer, so the stream is cut right after every trailer occurrence:

* JPEG images end with the two-byte EOI marker ``FF D9``.
* PNG images end with the ``IEND`` chunk, whose type field is followed by a
  four byte CRC.

Matching is byte exact and never re-enters an already consumed region.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .exceptions import UnsupportedFormatError

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .formats import ImageFormat

_LOGGER = logging.getLogger("pdfrasterx.demux")

JPEG_EOI_MARKER = b"\xff\xd9"
PNG_IEND_CHUNK = b"IEND"
PNG_CRC_LENGTH = 4


def split_jpeg_stream(data: bytes) -> list[bytes]:
    """Split *data* after every JPEG end-of-image marker.

    Trailing bytes after the last marker are dropped.
    """

    images: list[bytes] = []
    start = 0
    while True:
        index = data.find(JPEG_EOI_MARKER, start)
        if index < 0:
            break
        end = index + len(JPEG_EOI_MARKER)
        images.append(data[start:end])
        start = end

    if start < len(data):
        _LOGGER.debug("Ignoring %d trailing bytes after last JPEG marker", len(data) - start)
    return images


def split_png_stream(data: bytes) -> list[bytes]:
    """Split *data* after every PNG ``IEND`` chunk (including its CRC).

    A truncated final CRC is clamped to the end of the buffer.
    """

    images: list[bytes] = []
    start = 0
    while start < len(data):
        index = data.find(PNG_IEND_CHUNK, start)
        if index < 0:
            break
        end = min(index + len(PNG_IEND_CHUNK) + PNG_CRC_LENGTH, len(data))
        images.append(data[start:end])
        start = end
    return images


def split_stream(data: bytes, fmt: "ImageFormat | str") -> list[bytes]:
    """Split *data* using the framing registered for *fmt*."""

    from .formats import get_format_spec

    spec = get_format_spec(fmt)
    if spec.demuxer is None:
        raise UnsupportedFormatError(spec.format.value)
    images = spec.demuxer(data)
    _LOGGER.debug("Demuxed %d %s image(s) from %d bytes", len(images), spec.format.value, len(data))
    return images


__all__ = [
    "JPEG_EOI_MARKER",
    "PNG_IEND_CHUNK",
    "split_jpeg_stream",
    "split_png_stream",
    "split_stream",
]
