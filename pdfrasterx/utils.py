"""Utility helpers for :mod:`pdfrasterx`."""

from __future__ import annotations

import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

_LOGGER = logging.getLogger("pdfrasterx")


def resolve_path(path: os.PathLike[str] | str) -> Path:
    """Resolve *path* into an absolute :class:`~pathlib.Path`."""

    resolved = Path(path).expanduser().resolve()
    _LOGGER.debug("Resolved path '%s' to '%s'", path, resolved)
    return resolved


@contextmanager
def staged_pdf(data: bytes) -> Iterator[Path]:
    """Write *data* to a temporary ``.pdf`` file and remove it afterwards."""

    handle = tempfile.NamedTemporaryFile(prefix="pdfrasterx-", suffix=".pdf", delete=False)
    path = Path(handle.name)
    try:
        with handle:
            handle.write(data)
        yield path
    finally:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:  # pragma: no cover - platform dependent
            _LOGGER.warning("Failed to remove staged PDF %s: %s", path, exc)


def sizeof_fmt(num_bytes: float) -> str:
    """Format *num_bytes* into a human-friendly string."""

    step_unit = 1024.0
    for unit in ("bytes", "KiB", "MiB", "GiB"):
        if abs(num_bytes) < step_unit:
            return f"{num_bytes:3.1f} {unit}"
        num_bytes /= step_unit
    return f"{num_bytes:.1f} TiB"


__all__ = ["resolve_path", "staged_pdf", "sizeof_fmt"]
