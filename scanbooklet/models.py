"""
Data models for the booklet converter.

This module defines the typed values passed between the pipeline stages:
options, page geometry, metadata, the file-backed Page, and run results.
"""

import math
import shutil
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional

from .config import (
    DEFAULT_OUTPUT_SUFFIX,
    DEFAULT_PADDING_PAGE,
    DEFAULT_PADDING_POSITION,
    DEFAULT_SINGLE_PAGES,
    DIMENSION_TOLERANCE,
    FILE_NUMBER_WIDTH,
    PDF_SUFFIX,
)


def format_points(value: float) -> str:
    """
    Format a length in points for a command-line argument.

    Fixed-point with up to six decimals and trailing zeros removed, so
    large sizes keep every digit and whole numbers print as integers.
    """
    text = f"{value:.6f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


class PaddingPosition(Enum):
    """Where duplicated padding pages are inserted."""
    FRONT = "front"  # Just after the front cover
    BACK = "back"    # Just before the back cover
    SPLIT = "split"  # Alternating front/back, front first


@dataclass(frozen=True)
class PageDimensions:
    """Page size in PDF points."""
    width: float
    height: float

    def matches(self, other: 'PageDimensions') -> bool:
        """Check if two sizes are equal within DIMENSION_TOLERANCE."""
        return (
            math.isclose(self.width, other.width, abs_tol=DIMENSION_TOLERANCE) and
            math.isclose(self.height, other.height, abs_tol=DIMENSION_TOLERANCE)
        )

    def __str__(self):
        return f"{self.width:g}x{self.height:g}"


@dataclass(frozen=True)
class CropMargins:
    """
    Margins handed to the crop tool.

    Each value is a signed offset in points added to that edge; negative
    values cut inward, so CropMargins(right=-300) removes 300pt from the
    right side of the page.
    """
    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0

    @classmethod
    def left_half(cls, width: float) -> 'CropMargins':
        """Keep the left half of a page of the given width."""
        return cls(right=-width / 2)

    @classmethod
    def right_half(cls, width: float) -> 'CropMargins':
        """Keep the right half of a page of the given width."""
        return cls(left=-width / 2)

    def to_argument(self) -> str:
        """Format as the space separated 'left top right bottom' string."""
        return " ".join(format_points(value) for value in (self.left, self.top, self.right, self.bottom))

    def apply(self, dimensions: PageDimensions) -> PageDimensions:
        """Size of a page of the given dimensions after this crop."""
        return PageDimensions(
            width=dimensions.width + self.left + self.right,
            height=dimensions.height + self.top + self.bottom,
        )


@dataclass(frozen=True)
class PageMetadata:
    """Metadata of one physical page as reported by the burst tool."""
    number: int                 # 1-indexed position in the document
    dimensions: PageDimensions


@dataclass(frozen=True)
class DocumentMetadata:
    """Page count and per-page metadata of a whole document."""
    page_count: int
    pages: List[PageMetadata] = field(default_factory=list)

    def page(self, number: int) -> Optional[PageMetadata]:
        """Look up the metadata of a 1-indexed page, or None if absent."""
        for entry in self.pages:
            if entry.number == number:
                return entry
        return None


@dataclass(frozen=True)
class BookletDefaults:
    """
    User defaults persisted by the config service.

    These fill in whatever the command line does not specify.
    """
    single_pages: str = DEFAULT_SINGLE_PAGES
    padding_position: PaddingPosition = PaddingPosition(DEFAULT_PADDING_POSITION)
    padding_page: int = DEFAULT_PADDING_PAGE
    output_suffix: str = DEFAULT_OUTPUT_SUFFIX

    def __post_init__(self):
        """Validate defaults."""
        if self.padding_page == 0:
            raise ValueError("padding_page must be a non-zero page index")


@dataclass(frozen=True)
class BookletOptions:
    """
    Configuration of a single conversion run.

    Built once from the command line and the stored defaults, then passed
    unchanged to every pipeline stage.
    """
    input_path: Path
    output_path: Path
    single_pages: str = DEFAULT_SINGLE_PAGES
    padding_position: PaddingPosition = PaddingPosition.SPLIT
    padding_page: int = DEFAULT_PADDING_PAGE
    keep_temp: bool = False

    def __post_init__(self):
        """Validate options."""
        if self.padding_page == 0:
            raise ValueError("padding_page must be a non-zero page index")

    @staticmethod
    def default_output_path(input_path: Path, suffix: str = DEFAULT_OUTPUT_SUFFIX) -> Path:
        """Output path next to the input: book.pdf -> book-printable.pdf."""
        return input_path.with_name(f"{input_path.stem}{suffix}{PDF_SUFFIX}")


class FileNamer:
    """
    Allocates unique file names inside a run's work directory.

    Names are "<prefix>_<sequence>.pdf" with a single sequence counter per
    namer, so two allocations never return the same path.
    """

    def __init__(self, directory: Path, width: int = FILE_NUMBER_WIDTH):
        self.directory = directory
        self.width = width
        self._sequence = 0

    def allocate(self, prefix: str) -> Path:
        self._sequence += 1
        return self.directory / f"{prefix}_{self._sequence:0{self.width}d}{PDF_SUFFIX}"


class Page:
    """
    One single-page PDF file on disk.

    The page owns its file: discarding or replacing the page unlinks it.
    Dimensions are either known (given at construction or measured once
    through the probe) or unknown; replacing the file resets them to unknown.
    """

    def __init__(
        self,
        path: Path,
        probe: Callable[[Path], PageDimensions],
        dimensions: Optional[PageDimensions] = None
    ):
        self.path = path
        self._probe = probe
        self._dimensions = dimensions

    @property
    def dimensions_known(self) -> bool:
        return self._dimensions is not None

    @property
    def dimensions(self) -> PageDimensions:
        """Page size, measured on first access and cached until the file changes."""
        if self._dimensions is None:
            self._dimensions = self._probe(self.path)
        return self._dimensions

    @property
    def width(self) -> float:
        return self.dimensions.width

    @property
    def height(self) -> float:
        return self.dimensions.height

    def replace_file(self, new_path: Path):
        """Swap in a new file for this page, deleting the old one."""
        if new_path != self.path:
            self.discard()
        self.path = new_path
        self._dimensions = None

    def copy_to(self, path: Path) -> 'Page':
        """Duplicate this page into a new file."""
        shutil.copyfile(self.path, path)
        return Page(path, self._probe, self._dimensions)

    def discard(self):
        """Delete the backing file if it still exists."""
        if self.path.exists():
            self.path.unlink()

    def __repr__(self):
        state = str(self._dimensions) if self._dimensions else "unknown size"
        return f"Page('{self.path.name}', {state})"


@dataclass
class BookletResult:
    """Summary of a completed conversion."""
    physical_pages: int
    single_pages: List[int]
    split_pages: int
    page_size: PageDimensions
    padding_added: int
    final_pages: int
    output_path: Path

    def get_summary(self) -> str:
        """Get a human-readable summary of the run."""
        return (
            f"{self.physical_pages} scanned page(s), {self.split_pages} split, "
            f"{self.padding_added} padding page(s) added, "
            f"{self.final_pages} booklet pages at {self.page_size}"
        )


@dataclass
class ValidationResult:
    """
    Result of validation checks.

    Contains validation status, errors, and warnings that can be
    displayed to the user.
    """
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str):
        """Add an error message and mark as invalid."""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str):
        """Add a warning message."""
        self.warnings.append(message)

    def has_issues(self) -> bool:
        """Check if there are any errors or warnings."""
        return len(self.errors) > 0 or len(self.warnings) > 0

    def get_summary(self) -> str:
        """Get a human-readable summary of validation results."""
        if self.is_valid and not self.warnings:
            return "Validation passed with no issues"

        parts = []
        if self.errors:
            parts.append(f"{len(self.errors)} error(s)")
        if self.warnings:
            parts.append(f"{len(self.warnings)} warning(s)")

        return ", ".join(parts)
