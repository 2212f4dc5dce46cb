"""Custom exception types for :mod:`pdfrasterx`."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .partition import PageRange


class PDFRasterXError(Exception):
    """Base exception for all pdfrasterx related errors."""


class PopplerNotInstalledError(PDFRasterXError):
    """Raised when a Poppler executable cannot be launched.

    This signals a deployment problem (binary missing, not executable,
    permission denied) rather than a problem with the document. The
    originating :class:`OSError` is available as ``__cause__``.
    """

    def __init__(self, executable: str) -> None:
        self.executable = executable
        super().__init__(
            f"Unable to launch '{executable}'. Is poppler installed and on the PATH? "
            "If not, set the poppler_path option."
        )


class PDFInfoError(PDFRasterXError):
    """Raised when the page count of a document cannot be determined."""


class PDFConversionError(PDFRasterXError):
    """Raised when a rasterizer worker reports a fatal error."""

    def __init__(
        self,
        message: str,
        *,
        page_range: "PageRange | None" = None,
        stderr: str = "",
    ) -> None:
        self.page_range = page_range
        self.stderr = stderr
        super().__init__(message)


class UnsupportedFormatError(PDFRasterXError, ValueError):
    """Raised when the requested image format is not supported."""

    def __init__(self, fmt: object) -> None:
        self.format = fmt
        super().__init__(f"The image format {fmt!r} is not supported.")


class InvalidPageRangeError(PDFRasterXError, ValueError):
    """Raised when the requested page window is empty or out of bounds."""

    def __init__(self, first: int, last: int, page_count: int | None = None) -> None:
        self.first = first
        self.last = last
        self.page_count = page_count
        message = f"Invalid page range {first}-{last}"
        if page_count is not None:
            message += f" for a document with {page_count} pages"
        super().__init__(message + ".")


__all__ = [
    "PDFRasterXError",
    "PopplerNotInstalledError",
    "PDFInfoError",
    "PDFConversionError",
    "UnsupportedFormatError",
    "InvalidPageRangeError",
]
