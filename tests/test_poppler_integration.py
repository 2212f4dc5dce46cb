"""End-to-end tests against a real Poppler installation."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from pdfrasterx import (
    ConversionOptions,
    PDFInfoError,
    convert_from_bytes,
    convert_from_path,
    pdfinfo_from_path,
)

from conftest import LOCKED_PASSWORD, PNG_SIGNATURE

pytestmark = pytest.mark.skipif(
    shutil.which("pdfinfo") is None or shutil.which("pdftoppm") is None or shutil.which("pdftocairo") is None,
    reason="poppler-utils is not installed",
)


@pytest.fixture(autouse=True)
def _use_system_poppler(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PDFRASTERX_POPPLER_PATH", raising=False)


def test_pdfinfo_page_count(sample_pdf: Path) -> None:
    info = pdfinfo_from_path(sample_pdf)

    assert info["Pages"] == 13
    assert info["Title"] == "Sample"


def test_png_pages_with_workers(sample_pdf: Path) -> None:
    images = convert_from_path(sample_pdf, ConversionOptions(dpi=36, concurrency=4))

    assert len(images) == 13
    assert all(image.startswith(PNG_SIGNATURE) for image in images)


def test_jpeg_page_window(sample_pdf: Path) -> None:
    options = ConversionOptions(dpi=36, fmt="jpeg", concurrency=2, first_page=3, last_page=5)

    images = convert_from_path(sample_pdf, options)

    assert len(images) == 3
    assert all(image.startswith(b"\xff\xd8") for image in images)


def test_tiff_from_bytes(sample_pdf: Path) -> None:
    images = convert_from_bytes(sample_pdf.read_bytes(), ConversionOptions(dpi=36, fmt="tiff", last_page=2))

    assert len(images) == 2
    assert all(image[:4] in (b"II*\x00", b"MM\x00*") for image in images)


def test_scaled_output_is_smaller(sample_pdf: Path) -> None:
    full = convert_from_path(sample_pdf, ConversionOptions(dpi=72, fmt="jpeg", last_page=1))
    scaled = convert_from_path(sample_pdf, ConversionOptions(dpi=72, fmt="jpeg", last_page=1, width=20))

    assert len(scaled) == 1
    assert len(scaled[0]) < len(full[0])


def test_locked_pdf_requires_password(locked_pdf: Path) -> None:
    with pytest.raises(PDFInfoError):
        convert_from_path(locked_pdf, ConversionOptions(dpi=36, fmt="jpeg"))

    images = convert_from_path(
        locked_pdf,
        ConversionOptions(dpi=36, fmt="jpeg", concurrency=2, user_password=LOCKED_PASSWORD),
    )
    assert len(images) == 13
