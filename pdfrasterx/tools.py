"""Resolve Poppler executables and the environment their processes run in."""

from __future__ import annotations

import logging
import os

_LOGGER = logging.getLogger("pdfrasterx.tools")

PDFINFO = "pdfinfo"


def _is_windows() -> bool:
    return os.name == "nt"


def get_command_path(command: str, poppler_path: str | os.PathLike[str] | None = None) -> str:
    """Return the executable to launch for *command*.

    On Windows ``.exe`` is appended when missing. When *poppler_path* is
    given the command is joined onto it, otherwise it is looked up on
    ``PATH`` by the operating system at launch time.
    """

    if _is_windows() and not command.endswith(".exe"):
        command += ".exe"
    if poppler_path:
        command = os.path.join(os.fspath(poppler_path), command)
    return command


def build_env(poppler_path: str | os.PathLike[str] | None = None) -> dict[str, str] | None:
    """Return the child environment, with *poppler_path* prepended to ``PATH``.

    ``None`` means the child inherits the parent environment unchanged.
    """

    if not poppler_path:
        return None
    env = dict(os.environ)
    current = env.get("PATH", "")
    env["PATH"] = os.fspath(poppler_path) + os.pathsep + current if current else os.fspath(poppler_path)
    _LOGGER.debug("Prepending %s to child PATH", poppler_path)
    return env


__all__ = ["PDFINFO", "get_command_path", "build_env"]
