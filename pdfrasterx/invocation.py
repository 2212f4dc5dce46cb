"""Build rasterizer command lines for individual page ranges."""

from __future__ import annotations

import os

from .formats import FormatSpec
from .options import ConversionOptions
from .partition import PageRange
from .sinks import OutputSink
from .tools import build_env, get_command_path
from .types import WorkerInvocation

OUTPUT_NAME_TEMPLATE = "output-{index:04d}"


def output_name_for(index: int) -> str:
    return OUTPUT_NAME_TEMPLATE.format(index=index)


def _scale_arguments(width: int | None, height: int | None) -> list[str]:
    if width is not None and height is not None:
        return ["-scale-to-x", str(width), "-scale-to-y", str(height)]
    if width is not None:
        return ["-scale-to-x", str(width), "-scale-to-y", "-1"]
    if height is not None:
        return ["-scale-to-x", "-1", "-scale-to-y", str(height)]
    return []


def build_rasterizer_arguments(
    pdf_path: str | os.PathLike[str],
    page_range: PageRange,
    options: ConversionOptions,
    spec: FormatSpec,
    output_prefix: str | None,
) -> list[str]:
    """Construct the argument vector (without executable) for one worker."""

    args = ["-r", str(options.dpi), os.fspath(pdf_path)]
    if options.use_cropbox:
        args.append("-cropbox")
    if options.hide_annotations:
        args.append("-hide-annotations")
    if options.transparent and spec.supports_transparency:
        args.append("-transp")
    args += ["-f", str(page_range.first), "-l", str(page_range.last)]
    args.append(spec.flag)
    if output_prefix:
        args.append(output_prefix)
    if options.user_password:
        args += ["-upw", options.user_password]
    if options.owner_password:
        args += ["-opw", options.owner_password]
    if options.grayscale:
        args.append("-gray")
    args += _scale_arguments(options.width, options.height)
    return args


def build_invocation(
    pdf_path: str | os.PathLike[str],
    page_range: PageRange,
    index: int,
    options: ConversionOptions,
    spec: FormatSpec,
    sink: OutputSink,
) -> WorkerInvocation:
    """Return the :class:`WorkerInvocation` rendering *page_range*."""

    output_name = output_name_for(index)
    arguments = build_rasterizer_arguments(
        pdf_path,
        page_range,
        options,
        spec,
        sink.output_prefix(output_name),
    )
    return WorkerInvocation(
        index=index,
        page_range=page_range,
        executable=get_command_path(spec.rasterizer.value, options.poppler_path),
        arguments=tuple(arguments),
        env=build_env(options.poppler_path),
        output_name=output_name,
    )


__all__ = [
    "OUTPUT_NAME_TEMPLATE",
    "output_name_for",
    "build_rasterizer_arguments",
    "build_invocation",
]
