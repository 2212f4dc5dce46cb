from __future__ import annotations

import json
import os
import stat
import sys
import textwrap
from dataclasses import dataclass
from pathlib import Path

import pytest
from pypdf import PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
PNG_IEND = b"\x00\x00\x00\x00IEND\xaeB`\x82"
LOCKED_PASSWORD = "1984Bbiwy!"


def make_png(payload: bytes) -> bytes:
    return PNG_SIGNATURE + b"\x00\x00\x00\x0dIHDR" + payload + PNG_IEND


def make_jpeg(payload: bytes) -> bytes:
    return b"\xff\xd8\xff\xe0" + payload + b"\xff\xd9"


@pytest.fixture()
def sample_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "sample.pdf"
    writer = PdfWriter()
    for _ in range(13):
        writer.add_blank_page(width=200, height=200)
    writer.add_metadata({"/Producer": "pdfrasterx-tests", "/Title": "Sample"})
    with pdf_path.open("wb") as stream:
        writer.write(stream)
    return pdf_path


@pytest.fixture()
def locked_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "locked.pdf"
    writer = PdfWriter()
    for _ in range(13):
        writer.add_blank_page(width=200, height=200)
    writer.encrypt(user_password=LOCKED_PASSWORD, owner_password=LOCKED_PASSWORD + "-owner")
    with pdf_path.open("wb") as stream:
        writer.write(stream)
    return pdf_path


# A stand-in for pdfinfo, pdftoppm and pdftocairo. The "PDF" it reads is a
# JSON document describing how the tool should behave.
_FAKE_TOOL = textwrap.dedent(
    r'''
    import json
    import os
    import sys
    import time

    VALUE_FLAGS = {"-r", "-f", "-l", "-upw", "-opw", "-scale-to-x", "-scale-to-y"}
    FORMAT_FLAGS = {"-png": "png", "-jpeg": "jpg", "-tiff": "tif"}

    tool = os.path.basename(sys.argv[0])
    argv = sys.argv[1:]
    values, flags, positional = {}, set(), []
    index = 0
    while index < len(argv):
        arg = argv[index]
        if arg in VALUE_FLAGS:
            values[arg] = argv[index + 1]
            index += 2
            continue
        if arg.startswith("-") and len(arg) > 1:
            flags.add(arg)
        else:
            positional.append(arg)
        index += 1

    log_path = os.environ.get("FAKE_POPPLER_LOG")
    if log_path:
        with open(log_path, "a", encoding="utf-8") as handle:
            handle.write(json.dumps({"tool": tool, "argv": argv, "path": os.environ.get("PATH", "")}) + "\n")

    with open(positional[0], encoding="utf-8") as handle:
        doc = json.load(handle)

    password = doc.get("password")
    if password and values.get("-upw") != password:
        sys.stderr.write("Command Line Error: Incorrect password\n")
        sys.exit(1)

    if tool.startswith("pdfinfo"):
        info_first = max(int(values.get("-f", 1)), 1)
        info_last = int(values.get("-l", 0))
        if info_last == 0 or info_last > doc["pages"]:
            info_last = doc["pages"]
        if info_first > info_last:
            sys.stderr.write(
                "Wrong page range given: the first page (%d) can not be after the last page (%d).\n"
                % (info_first, info_last)
            )
            sys.exit(99)
        sys.stdout.write("Title:          fake\n")
        sys.stdout.write("Pages:          %d\n" % doc["pages"])
        sys.stdout.write("Page size:      612 x 792 pts (letter)\n")
        sys.exit(0)

    first = int(values.get("-f", 1))
    last = min(int(values.get("-l", doc["pages"])), doc["pages"])
    if first == 1 and doc.get("delay_first"):
        time.sleep(doc["delay_first"])

    extension = next(FORMAT_FLAGS[flag] for flag in FORMAT_FLAGS if flag in flags)
    padding = "x" * doc.get("payload_size", 0)
    width = len(str(doc["pages"]))

    def render(page):
        payload = ("page-%d;" % page + padding).encode()
        if extension == "jpg":
            return b"\xff\xd8\xff\xe0" + payload + b"\xff\xd9"
        return b"\x89PNG\r\n\x1a\n\x00\x00\x00\x0dIHDR" + payload + b"\x00\x00\x00\x00IEND\xaeB`\x82"

    stderr = doc.get("stderr", "")
    if stderr:
        sys.stderr.write(stderr * doc.get("stderr_repeat", 1))
        sys.stderr.flush()

    for page in range(first, last + 1):
        if len(positional) > 1:
            target = "%s-%0*d.%s" % (positional[1], width, page, extension)
            with open(target, "wb") as handle:
                handle.write(render(page))
        else:
            sys.stdout.buffer.write(render(page))
    sys.stdout.flush()
    sys.exit(doc.get("exit_code", 0))
    '''
)


@dataclass
class FakePoppler:
    bin_dir: Path
    docs_dir: Path
    log_path: Path

    def make_document(self, name: str = "doc.pdf", *, pages: int = 13, **behaviour: object) -> Path:
        path = self.docs_dir / name
        path.write_text(json.dumps({"pages": pages, **behaviour}), encoding="utf-8")
        return path

    def calls(self, tool: str | None = None) -> list[dict]:
        if not self.log_path.exists():
            return []
        entries = [json.loads(line) for line in self.log_path.read_text(encoding="utf-8").splitlines()]
        return [entry for entry in entries if tool is None or entry["tool"] == tool]


@pytest.fixture()
def fake_poppler(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> FakePoppler:
    if os.name == "nt":
        pytest.skip("fake poppler scripts rely on POSIX shebang lines")
    shebang = f"#!{sys.executable}\n"
    if len(shebang) > 120:
        pytest.skip("interpreter path too long for a shebang line")

    bin_dir = tmp_path / "poppler-bin"
    docs_dir = tmp_path / "docs"
    bin_dir.mkdir()
    docs_dir.mkdir()
    for tool in ("pdfinfo", "pdftoppm", "pdftocairo"):
        script = bin_dir / tool
        script.write_text(shebang + _FAKE_TOOL, encoding="utf-8")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    log_path = tmp_path / "poppler-calls.jsonl"
    monkeypatch.setenv("FAKE_POPPLER_LOG", str(log_path))
    monkeypatch.delenv("PDFRASTERX_POPPLER_PATH", raising=False)
    return FakePoppler(bin_dir=bin_dir, docs_dir=docs_dir, log_path=log_path)
