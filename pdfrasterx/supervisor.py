"""Launch rasterizer processes and capture their output concurrently."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import cast

from .exceptions import PopplerNotInstalledError
from .types import WorkerInvocation, WorkerResult

_LOGGER = logging.getLogger("pdfrasterx.supervisor")


async def _terminate(process: asyncio.subprocess.Process) -> None:
    if process.returncode is not None:
        return
    try:
        process.kill()
    except ProcessLookupError:  # pragma: no cover - exited in between
        pass
    await process.wait()


async def run_worker(invocation: WorkerInvocation) -> WorkerResult:
    """Run one rasterizer process to completion.

    Standard output and standard error are drained by two independent
    reader tasks that start before the exit status is awaited. A tool
    writing more than the pipe buffer therefore never blocks.
    """

    _LOGGER.debug("Worker %d executing: %s", invocation.index, " ".join(invocation.command))
    try:
        process = await asyncio.create_subprocess_exec(
            invocation.executable,
            *invocation.arguments,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=invocation.env,
        )
    except OSError as exc:
        raise PopplerNotInstalledError(invocation.executable) from exc

    # Both pipes exist because they were requested with PIPE above.
    stdout_reader = cast(asyncio.StreamReader, process.stdout)
    stderr_reader = cast(asyncio.StreamReader, process.stderr)
    stdout_task = asyncio.ensure_future(stdout_reader.read())
    stderr_task = asyncio.ensure_future(stderr_reader.read())
    try:
        returncode = await process.wait()
        stdout, stderr = await asyncio.gather(stdout_task, stderr_task)
    except BaseException:
        stdout_task.cancel()
        stderr_task.cancel()
        await _terminate(process)
        raise

    if returncode != 0:
        _LOGGER.warning(
            "Worker %d (%s) exited with status %d",
            invocation.index,
            invocation.page_range.label(),
            returncode,
        )
    _LOGGER.debug(
        "Worker %d finished: %d bytes stdout, %d bytes stderr",
        invocation.index,
        len(stdout),
        len(stderr),
    )
    return WorkerResult(
        index=invocation.index,
        page_range=invocation.page_range,
        output_name=invocation.output_name,
        stdout=stdout,
        stderr=stderr.decode("utf-8", errors="replace"),
        returncode=returncode,
    )


async def run_workers(invocations: Sequence[WorkerInvocation]) -> list[WorkerResult]:
    """Run every invocation concurrently and return results in index order.

    All workers belong to one task group: if any of them raises, the others
    are cancelled (killing their processes) before the error propagates.
    """

    results: list[WorkerResult | None] = [None] * len(invocations)

    async def worker(position: int, invocation: WorkerInvocation) -> None:
        results[position] = await run_worker(invocation)

    try:
        async with asyncio.TaskGroup() as tg:
            for position, invocation in enumerate(invocations):
                tg.create_task(worker(position, invocation))
    except BaseExceptionGroup as group:
        # Surface the first worker error directly, keeping its original cause.
        raise group.exceptions[0]

    return [result for result in results if result is not None]


__all__ = ["run_worker", "run_workers"]
