"""Conversion options for :mod:`pdfrasterx`."""

from __future__ import annotations

import dataclasses
import os

from .formats import ImageFormat

DEFAULT_DPI = 200
DEFAULT_FORMAT = ImageFormat.PNG
POPPLER_PATH_ENV = "PDFRASTERX_POPPLER_PATH"


def _default_poppler_path() -> str | None:
    return os.environ.get(POPPLER_PATH_ENV) or None


@dataclasses.dataclass(slots=True)
class ConversionOptions:
    """Rendering and orchestration settings for one conversion.

    ``first_page``/``last_page`` default to the whole document. ``width`` and
    ``height`` scale the output; leaving one unset keeps the aspect ratio.
    Setting ``output_folder`` keeps the rendered files on disk.
    """

    dpi: int = DEFAULT_DPI
    fmt: ImageFormat | str = DEFAULT_FORMAT
    concurrency: int = 1
    first_page: int | None = None
    last_page: int | None = None
    use_cropbox: bool = False
    transparent: bool = False
    grayscale: bool = False
    width: int | None = None
    height: int | None = None
    hide_annotations: bool = False
    user_password: str | None = None
    owner_password: str | None = None
    output_folder: str | os.PathLike[str] | None = None
    poppler_path: str | os.PathLike[str] | None = dataclasses.field(default_factory=_default_poppler_path)


__all__ = ["ConversionOptions", "DEFAULT_DPI", "DEFAULT_FORMAT", "POPPLER_PATH_ENV"]
