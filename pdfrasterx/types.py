"""
Type definitions and dataclasses for pdfrasterx.

This module defines the records passed between the invocation builder,
the worker supervisor and the result aggregator.
"""

from __future__ import annotations

from dataclasses import dataclass

from .partition import PageRange


@dataclass(frozen=True)
class WorkerInvocation:
    """
    One rasterizer process to launch.

    Attributes:
        index: Position of the page range in partition order
        page_range: Pages rendered by this process
        executable: Program to launch
        arguments: Command-line arguments, excluding the executable
        env: Child environment, or ``None`` to inherit the parent's
        output_name: Unique file name prefix assigned to this worker
    """
    index: int
    page_range: PageRange
    executable: str
    arguments: tuple[str, ...]
    env: dict[str, str] | None
    output_name: str

    @property
    def command(self) -> list[str]:
        return [self.executable, *self.arguments]


@dataclass(frozen=True)
class WorkerResult:
    """
    Captured output of one finished rasterizer process.

    Attributes:
        index: Position of the page range in partition order
        page_range: Pages rendered by the process
        output_name: File name prefix the worker wrote under
        stdout: Raw standard output
        stderr: Decoded standard error
        returncode: Process exit status
    """
    index: int
    page_range: PageRange
    output_name: str
    stdout: bytes
    stderr: str
    returncode: int

    def __repr__(self) -> str:
        return (
            f"WorkerResult(index={self.index}, pages={self.page_range.first}-{self.page_range.last}, "
            f"stdout={len(self.stdout)} bytes, returncode={self.returncode})"
        )


__all__ = ["WorkerInvocation", "WorkerResult"]
