"""
Adapters around the external PDF tools.

Each capability the pipeline needs (burst, measure, crop, resize,
concatenate, impose) has a small abstract interface and one implementation
that shells out to a command-line program. Tests swap in fakes through
PdfToolkit.
"""

import logging
import shlex
import shutil
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from .config import (
    BURST_METADATA_FILE,
    FILE_NUMBER_WIDTH,
    GHOSTSCRIPT,
    INSTALL_HINTS,
    PDFCROP,
    PDFJAM,
    PDFTK,
)
from .errors import ToolError
from .metadata import parse_page_dimensions
from .models import CropMargins, PageDimensions, format_points

log = logging.getLogger(__name__)


def run_command(args: Sequence[str], cwd: Optional[Path] = None, get_output: bool = False) -> str:
    """
    Run an external command and wait for it to finish.

    Args:
        args: Program and arguments
        cwd: Working directory for the command
        get_output: Capture and return stdout instead of letting it through

    Returns:
        Captured stdout, or "" when get_output is False

    Raises:
        ToolError: If the program is missing or exits with a non-zero status
    """
    args = [str(arg) for arg in args]
    printable = " ".join(shlex.quote(arg) for arg in args)
    log.debug("Running external command: %s", printable)

    try:
        completed = subprocess.run(
            args,
            cwd=str(cwd) if cwd else None,
            stdout=subprocess.PIPE if get_output else None,
            check=True,
        )
    except FileNotFoundError as e:
        raise ToolError(f"Program not found: {args[0]}") from e
    except subprocess.CalledProcessError as e:
        raise ToolError(f"Command failed with exit status {e.returncode}: {printable}") from e

    if get_output:
        return completed.stdout.decode("utf-8", errors="replace")
    return ""


@dataclass
class BurstResult:
    """Per-page files and the metadata text of a burst document."""
    page_files: List[Path]
    metadata_text: str


class Burster(ABC):
    """Explodes a PDF into one file per physical page."""

    @abstractmethod
    def burst(self, source: Path, output_dir: Path) -> BurstResult:
        """Write one file per page into output_dir, in page order."""


class DimensionProbe(ABC):
    """Measures the size of a single-page PDF file."""

    @abstractmethod
    def measure(self, path: Path) -> PageDimensions:
        ...


class Cropper(ABC):
    """Crops every page of a PDF."""

    @abstractmethod
    def crop(self, source: Path, destination: Path, margins: Optional[CropMargins] = None):
        """Crop by the given margins, or to the content bounding box when None."""


class Resizer(ABC):
    """Places a PDF on a fixed media size without scaling its content."""

    @abstractmethod
    def resize(self, source: Path, destination: Path, dimensions: PageDimensions):
        ...


class Concatenator(ABC):
    """Joins PDFs into one document, in the given order."""

    @abstractmethod
    def concatenate(self, sources: Sequence[Path], destination: Path):
        ...


class Imposer(ABC):
    """Lays pages out two per sheet in booklet signature order."""

    @abstractmethod
    def impose(self, source: Path, destination: Path):
        ...


class PdftkBurster(Burster):
    """Burst with "pdftk burst", which also writes doc_data.txt."""

    def burst(self, source: Path, output_dir: Path) -> BurstResult:
        pattern = f"page_%0{FILE_NUMBER_WIDTH}d.pdf"
        # pdftk drops doc_data.txt into its working directory
        run_command([PDFTK, source.resolve(), "burst", "output", pattern], cwd=output_dir)

        metadata_path = output_dir / BURST_METADATA_FILE
        if not metadata_path.exists():
            raise ToolError(f"{PDFTK} burst did not write {BURST_METADATA_FILE}")
        metadata_text = metadata_path.read_text(encoding="utf-8", errors="replace")
        metadata_path.unlink()

        return BurstResult(
            page_files=sorted(output_dir.glob("page_*.pdf")),
            metadata_text=metadata_text,
        )


class PdftkDimensionProbe(DimensionProbe):
    """Read the crop/media rectangle from "pdftk dump_data"."""

    def measure(self, path: Path) -> PageDimensions:
        output = run_command([PDFTK, path, "dump_data"], get_output=True)
        return parse_page_dimensions(output)


class PdfcropCropper(Cropper):

    def crop(self, source: Path, destination: Path, margins: Optional[CropMargins] = None):
        args = [PDFCROP]
        if margins is not None:
            args += ["--margins", margins.to_argument()]
        run_command(args + [source, destination])


class GhostscriptResizer(Resizer):
    """
    Fixed-media resize through Ghostscript's pdfwrite device.

    FIXEDMEDIA keeps the requested size for every page; without
    -dPDFFitPage the content is neither scaled nor stretched, so larger
    pages are clipped and smaller ones padded.
    """

    def resize(self, source: Path, destination: Path, dimensions: PageDimensions):
        run_command([
            GHOSTSCRIPT,
            "-q",
            "-dNOPAUSE",
            "-dBATCH",
            "-dSAFER",
            "-sDEVICE=pdfwrite",
            f"-dDEVICEWIDTHPOINTS={format_points(dimensions.width)}",
            f"-dDEVICEHEIGHTPOINTS={format_points(dimensions.height)}",
            "-dFIXEDMEDIA",
            f"-sOutputFile={destination}",
            source,
        ])


class PdftkConcatenator(Concatenator):

    def concatenate(self, sources: Sequence[Path], destination: Path):
        run_command([PDFTK] + list(sources) + ["cat", "output", destination])


class PdfjamImposer(Imposer):

    def impose(self, source: Path, destination: Path):
        run_command([
            PDFJAM,
            "--booklet", "true",
            "--landscape",
            "--outfile", destination,
            "--",  # no more options
            source,
        ])


def require(executable: str):
    """
    Ensure an external program is on the PATH.

    Raises:
        ToolError: If the program cannot be found
    """
    if shutil.which(executable) is None:
        hint = INSTALL_HINTS.get(executable, "")
        raise ToolError(f"Need {executable!r} on the PATH. {hint}".rstrip())


@dataclass
class PdfToolkit:
    """The set of tool adapters one run works with."""
    burster: Burster
    probe: DimensionProbe
    cropper: Cropper
    resizer: Resizer
    concatenator: Concatenator
    imposer: Imposer
    executables: List[str] = field(default_factory=list)

    @classmethod
    def external(cls) -> 'PdfToolkit':
        """Toolkit backed by pdftk, pdfcrop, Ghostscript and pdfjam."""
        return cls(
            burster=PdftkBurster(),
            probe=PdftkDimensionProbe(),
            cropper=PdfcropCropper(),
            resizer=GhostscriptResizer(),
            concatenator=PdftkConcatenator(),
            imposer=PdfjamImposer(),
            executables=[PDFTK, PDFCROP, GHOSTSCRIPT, PDFJAM],
        )

    def check_available(self):
        """
        Verify every external program this toolkit needs.

        Raises:
            ToolError: Listing every program missing from the PATH
        """
        missing = []
        for executable in self.executables:
            try:
                require(executable)
            except ToolError as e:
                missing.append(str(e))

        if missing:
            raise ToolError("\n".join(missing))
