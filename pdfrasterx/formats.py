"""Supported output formats and the per-format behaviour table."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from .demux import split_jpeg_stream, split_png_stream
from .exceptions import UnsupportedFormatError


class ImageFormat(str, Enum):
    """Enumeration of the image formats the rasterizers can emit."""

    PNG = "png"
    JPEG = "jpeg"
    TIFF = "tiff"

    @classmethod
    def parse(cls, value: "ImageFormat | str") -> "ImageFormat":
        """Coerce *value* into an :class:`ImageFormat`.

        Accepts enum members and case-insensitive names, including the
        ``jpg`` and ``tif`` aliases.
        """

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            key = _ALIASES.get(key, key)
            try:
                return cls(key)
            except ValueError:
                pass
        raise UnsupportedFormatError(value)


_ALIASES = {"jpg": "jpeg", "tif": "tiff"}


class Rasterizer(str, Enum):
    """The two Poppler rasterizer personalities."""

    PDFTOPPM = "pdftoppm"
    PDFTOCAIRO = "pdftocairo"


@dataclass(frozen=True)
class FormatSpec:
    """Describes how one output format is produced and collected."""

    format: ImageFormat
    flag: str
    extension: str
    rasterizer: Rasterizer
    supports_transparency: bool
    demuxer: Callable[[bytes], list[bytes]] | None

    @property
    def requires_directory(self) -> bool:
        # pdftocairo cannot stream more than one page to stdout.
        return self.rasterizer is Rasterizer.PDFTOCAIRO


_FORMAT_SPECS: dict[ImageFormat, FormatSpec] = {
    ImageFormat.PNG: FormatSpec(
        ImageFormat.PNG,
        flag="-png",
        extension="png",
        rasterizer=Rasterizer.PDFTOCAIRO,
        supports_transparency=True,
        demuxer=split_png_stream,
    ),
    ImageFormat.JPEG: FormatSpec(
        ImageFormat.JPEG,
        flag="-jpeg",
        extension="jpg",
        rasterizer=Rasterizer.PDFTOPPM,
        supports_transparency=False,
        demuxer=split_jpeg_stream,
    ),
    ImageFormat.TIFF: FormatSpec(
        ImageFormat.TIFF,
        flag="-tiff",
        extension="tif",
        rasterizer=Rasterizer.PDFTOCAIRO,
        supports_transparency=True,
        demuxer=None,
    ),
}


def get_format_spec(fmt: ImageFormat | str) -> FormatSpec:
    """Return the :class:`FormatSpec` for *fmt*."""

    image_format = ImageFormat.parse(fmt)
    try:
        return _FORMAT_SPECS[image_format]
    except KeyError as exc:  # pragma: no cover - table covers the enum
        raise UnsupportedFormatError(fmt) from exc


__all__ = ["ImageFormat", "Rasterizer", "FormatSpec", "get_format_spec"]
