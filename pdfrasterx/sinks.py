"""Where rasterizer output goes and how it is collected back.

A :class:`StreamSink` captures standard output and demuxes it in memory. A
:class:`DirectorySink` hands every worker a file prefix inside a shared
directory and later reads back the files carrying that prefix.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Protocol

from .demux import split_stream
from .exceptions import PDFConversionError
from .formats import FormatSpec
from .types import WorkerResult

_LOGGER = logging.getLogger("pdfrasterx.sinks")


class OutputSink(Protocol):
    """Lightweight output sink abstraction."""

    def output_prefix(self, output_name: str) -> str | None: ...

    def collect(self, result: WorkerResult) -> list[bytes]: ...

    def close(self) -> None: ...


class StreamSink:
    """Collect images from each worker's captured standard output."""

    def __init__(self, spec: FormatSpec) -> None:
        if spec.demuxer is None:
            raise ValueError(f"Format {spec.format.value} cannot be streamed")
        self.spec = spec

    def output_prefix(self, output_name: str) -> None:
        return None

    def collect(self, result: WorkerResult) -> list[bytes]:
        return split_stream(result.stdout, self.spec.format)

    def close(self) -> None:
        pass

    def __enter__(self) -> "StreamSink":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class DirectorySink:
    """Collect images written as files into a shared directory."""

    def __init__(self, directory: str | os.PathLike[str], spec: FormatSpec, *, owned: bool = False) -> None:
        self.directory = Path(directory)
        self.spec = spec
        self.owned = owned
        self.directory.mkdir(parents=True, exist_ok=True)

    @classmethod
    def temporary(cls, spec: FormatSpec) -> "DirectorySink":
        """Create a sink over a fresh temporary directory removed on close."""

        directory = tempfile.mkdtemp(prefix="pdfrasterx-")
        _LOGGER.debug("Created temporary output directory %s", directory)
        return cls(directory, spec, owned=True)

    def _output_names(self, output_name: str) -> list[str]:
        prefix = f"{output_name}-"
        suffix = f".{self.spec.extension}"
        return sorted(
            entry.name
            for entry in self.directory.iterdir()
            if entry.name.startswith(prefix) and entry.name.endswith(suffix)
        )

    def output_prefix(self, output_name: str) -> str:
        """Claim *output_name* for one worker and return its file prefix.

        Files left under the same prefix by an earlier run are removed so
        they cannot be collected as part of this one.
        """

        for name in self._output_names(output_name):
            stale = self.directory / name
            _LOGGER.debug("Removing stale output %s", stale)
            try:
                stale.unlink()
            except OSError as exc:
                raise PDFConversionError(f"Unable to remove stale output {stale}: {exc}") from exc
        return str(self.directory / output_name)

    def collect(self, result: WorkerResult) -> list[bytes]:
        """Read the files written under the worker's prefix, in name order.

        Any file that cannot be read fails the conversion with
        :class:`PDFConversionError` rather than being skipped.
        """

        images: list[bytes] = []
        for name in self._output_names(result.output_name):
            path = self.directory / name
            try:
                images.append(path.read_bytes())
            except OSError as exc:
                raise PDFConversionError(
                    f"Unable to read rendered image {path}: {exc}",
                    page_range=result.page_range,
                ) from exc
        _LOGGER.debug("Loaded %d file(s) for %s from %s", len(images), result.output_name, self.directory)
        return images

    def close(self) -> None:
        if not self.owned or not self.directory.exists():
            return
        try:
            shutil.rmtree(self.directory)
        except OSError as exc:
            _LOGGER.warning("Error deleting temporary folder %s: %s", self.directory, exc)

    def __enter__(self) -> "DirectorySink":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def open_sink(spec: FormatSpec, output_folder: str | os.PathLike[str] | None = None) -> StreamSink | DirectorySink:
    """Select the sink for one conversion.

    A caller supplied *output_folder* always wins and is kept afterwards.
    Formats rendered by ``pdftocairo`` otherwise get a temporary directory.
    """

    if output_folder:
        return DirectorySink(output_folder, spec)
    if spec.requires_directory:
        return DirectorySink.temporary(spec)
    return StreamSink(spec)


__all__ = ["OutputSink", "StreamSink", "DirectorySink", "open_sink"]
