"""
Pytest configuration and fixtures.

The fake tools below stand in for pdftk, pdfcrop, Ghostscript and pdfjam.
Every fake "PDF" is a small text file holding a label such as "p3" or
"p3L"; the fakes track the page size of each label, so the page accounting
can be followed without real PDF tools.
"""

from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import pytest

from scanbooklet.errors import ToolError
from scanbooklet.models import CropMargins, PageDimensions
from scanbooklet.tools import (
    Burster,
    BurstResult,
    Concatenator,
    Cropper,
    DimensionProbe,
    Imposer,
    PdfToolkit,
    Resizer,
)

SPREAD = (1200.0, 800.0)
COVER = (610.0, 810.0)


def make_dump_data(sizes: Sequence[Tuple[float, float]], declared: Optional[int] = None) -> str:
    """Metadata text in the layout of "pdftk dump_data"."""
    lines = [
        "InfoBegin",
        "InfoKey: Producer",
        "InfoValue: Scanner Software",
        f"NumberOfPages: {len(sizes) if declared is None else declared}",
    ]
    for number, (width, height) in enumerate(sizes, start=1):
        lines += [
            "PageMediaBegin",
            f"PageMediaNumber: {number}",
            "PageMediaRotation: 0",
            f"PageMediaRect: 0 0 {width:g} {height:g}",
            f"PageMediaDimensions: {width:,g} {height:,g}",
        ]
    return "\n".join(lines) + "\n"


class FakeTools:
    """Shared state of the fake tool adapters."""

    def __init__(self, sizes: Sequence[Tuple[float, float]], metadata_text: Optional[str] = None):
        self.page_sizes = list(sizes)
        self.metadata_text = metadata_text if metadata_text is not None else make_dump_data(sizes)
        self.sizes = {}
        self.calls: List[Tuple[str, tuple]] = []
        self.joined_labels: List[str] = []
        self.fail_on: Optional[str] = None

    def record(self, tool: str, *args):
        self.calls.append((tool, args))
        if tool == self.fail_on:
            raise ToolError(f"{tool} failed")

    def count(self, tool: str) -> int:
        return sum(1 for name, _ in self.calls if name == tool)

    @staticmethod
    def write(path: Path, label: str):
        path.write_text(label)

    def toolkit(self) -> PdfToolkit:
        return PdfToolkit(
            burster=FakeBurster(self),
            probe=FakeProbe(self),
            cropper=FakeCropper(self),
            resizer=FakeResizer(self),
            concatenator=FakeConcatenator(self),
            imposer=FakeImposer(self),
        )


class FakeBurster(Burster):
    def __init__(self, tools: FakeTools):
        self.tools = tools

    def burst(self, source: Path, output_dir: Path) -> BurstResult:
        self.tools.record("burst", source)
        files = []
        for number, (width, height) in enumerate(self.tools.page_sizes, start=1):
            label = f"p{number}"
            path = output_dir / f"page_{number:04d}.pdf"
            self.tools.write(path, label)
            self.tools.sizes[label] = PageDimensions(width, height)
            files.append(path)
        return BurstResult(page_files=files, metadata_text=self.tools.metadata_text)


class FakeProbe(DimensionProbe):
    def __init__(self, tools: FakeTools):
        self.tools = tools

    def measure(self, path: Path) -> PageDimensions:
        self.tools.record("measure", path)
        return self.tools.sizes[path.read_text()]


class FakeCropper(Cropper):
    def __init__(self, tools: FakeTools):
        self.tools = tools

    def crop(self, source: Path, destination: Path, margins: Optional[CropMargins] = None):
        self.tools.record("crop", source, destination, margins)
        label = source.read_text()
        if margins is None:
            self.tools.write(destination, f"{label}|cropped")
            return
        new_label = label + ("L" if margins.right < 0 else "R")
        self.tools.sizes[new_label] = margins.apply(self.tools.sizes[label])
        self.tools.write(destination, new_label)


class FakeResizer(Resizer):
    def __init__(self, tools: FakeTools):
        self.tools = tools

    def resize(self, source: Path, destination: Path, dimensions: PageDimensions):
        self.tools.record("resize", source, destination, dimensions)
        label = source.read_text()
        self.tools.sizes[label] = dimensions
        self.tools.write(destination, label)


class FakeConcatenator(Concatenator):
    def __init__(self, tools: FakeTools):
        self.tools = tools

    def concatenate(self, sources: Sequence[Path], destination: Path):
        self.tools.record("concatenate", list(sources), destination)
        self.tools.joined_labels = [path.read_text() for path in sources]
        self.tools.write(destination, "joined")


class FakeImposer(Imposer):
    def __init__(self, tools: FakeTools):
        self.tools = tools

    def impose(self, source: Path, destination: Path):
        self.tools.record("impose", source, destination)
        self.tools.write(destination, "imposed")


@pytest.fixture
def fake_tools_factory():
    """Build FakeTools for a list of physical page sizes."""
    return FakeTools


@pytest.fixture
def book_tools():
    """Fake tools for a 6 page scan: cover, 4 spreads, back cover."""
    return FakeTools([COVER] + [SPREAD] * 4 + [COVER])


@pytest.fixture
def dump_data():
    """Factory for pdftk style metadata text."""
    return make_dump_data


@pytest.fixture
def scan_pdf(tmp_path):
    """Placeholder input PDF for runs with fake tools."""
    path = tmp_path / "scan.pdf"
    path.write_text("scan")
    return path


@pytest.fixture
def temp_pdf_path(tmp_path):
    """Create a temporary PDF path for testing."""
    return tmp_path / "test.pdf"
