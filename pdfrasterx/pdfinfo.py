"""Query document metadata through Poppler's :command:`pdfinfo`."""

from __future__ import annotations

import logging
import os
import subprocess
from typing import Sequence

from .exceptions import PDFInfoError, PopplerNotInstalledError
from .tools import PDFINFO, build_env, get_command_path
from .utils import resolve_path, staged_pdf

_LOGGER = logging.getLogger("pdfrasterx.pdfinfo")

PAGES_FIELD = "Pages"
_INTEGER_FIELDS = frozenset({PAGES_FIELD})

PageMetadata = dict[str, "str | int"]


def build_pdfinfo_command(
    pdf_path: str | os.PathLike[str],
    *,
    user_password: str | None = None,
    owner_password: str | None = None,
    first_page: int | None = None,
    last_page: int | None = None,
    poppler_path: str | os.PathLike[str] | None = None,
) -> list[str]:
    """Construct the :command:`pdfinfo` command line."""

    command = [get_command_path(PDFINFO, poppler_path)]
    if user_password:
        command += ["-upw", user_password]
    if owner_password:
        command += ["-opw", owner_password]
    if first_page is not None:
        command += ["-f", str(first_page)]
    if last_page is not None:
        command += ["-l", str(last_page)]
    command.append(os.fspath(pdf_path))
    return command


def parse_pdfinfo_output(output: str) -> PageMetadata:
    """Parse ``Field: value`` lines into a mapping.

    Only the first colon separates key and value. Integer fields that fail
    to parse are kept as strings.
    """

    result: PageMetadata = {}
    for line in output.splitlines():
        if ":" not in line:
            continue
        key, value = line.split(":", 1)
        key = key.strip()
        value = value.strip()
        if key in _INTEGER_FIELDS:
            try:
                result[key] = int(value)
                continue
            except ValueError:
                pass
        result[key] = value
    return result


def _run(command: Sequence[str], env: dict[str, str] | None) -> subprocess.CompletedProcess[bytes]:
    _LOGGER.debug("Executing command: %s", " ".join(command))
    try:
        completed = subprocess.run(
            list(command),
            env=env,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
        )
    except OSError as exc:
        raise PopplerNotInstalledError(command[0]) from exc
    _LOGGER.debug("Command finished with exit code %s", completed.returncode)
    return completed


def pdfinfo_from_path(
    pdf_path: str | os.PathLike[str],
    *,
    user_password: str | None = None,
    owner_password: str | None = None,
    first_page: int | None = None,
    last_page: int | None = None,
    poppler_path: str | os.PathLike[str] | None = None,
) -> PageMetadata:
    """Return the :command:`pdfinfo` fields for *pdf_path*.

    Raises
    ------
    PopplerNotInstalledError
        If :command:`pdfinfo` cannot be launched.
    PDFInfoError
        If no integer page count is reported. This covers corrupted files
        and missing or wrong passwords alike.
    """

    source = resolve_path(pdf_path)
    command = build_pdfinfo_command(
        source,
        user_password=user_password,
        owner_password=owner_password,
        first_page=first_page,
        last_page=last_page,
        poppler_path=poppler_path,
    )
    completed = _run(command, build_env(poppler_path))

    stdout = completed.stdout.decode("utf-8", errors="replace")
    stderr = completed.stderr.decode("utf-8", errors="replace").strip()
    info = parse_pdfinfo_output(stdout)

    if not isinstance(info.get(PAGES_FIELD), int):
        raise PDFInfoError(f"Unable to get page count from {source}. {stderr}".rstrip())
    return info


def pdfinfo_from_bytes(data: bytes, **kwargs) -> PageMetadata:
    """Like :func:`pdfinfo_from_path` for an in-memory document."""

    with staged_pdf(data) as path:
        return pdfinfo_from_path(path, **kwargs)


__all__ = [
    "PAGES_FIELD",
    "PageMetadata",
    "build_pdfinfo_command",
    "parse_pdfinfo_output",
    "pdfinfo_from_path",
    "pdfinfo_from_bytes",
]
