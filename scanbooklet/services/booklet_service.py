"""
Booklet Service - High-level conversion of a scanned book to a booklet.

This service sequences the pipeline stages, owns the run's temporary
directory, and hands the final page list to the assembly tools.
"""

import logging
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

from ..errors import UsageError
from ..models import BookletOptions, BookletResult, FileNamer, Page
from ..page_ranges import format_page_set, parse_page_range
from ..tools import PdfToolkit
from ..validators import OptionsValidator
from .burst_service import BurstService
from .padding_service import PaddingService
from .resize_service import ResizeService
from .split_service import SplitService

log = logging.getLogger(__name__)


class BookletService:
    """
    High-level service for booklet conversion.

    Runs burst, split, resize, pad and assembly in order. Every stage waits
    for its tools to finish; the first failure aborts the run.
    """

    def __init__(self, toolkit: PdfToolkit):
        self.toolkit = toolkit
        self.work_dir: Optional[Path] = None

    def generate(self, options: BookletOptions) -> BookletResult:
        """
        Convert a scanned book PDF into an imposed booklet PDF.

        Args:
            options: Conversion options

        Returns:
            BookletResult describing the run

        Raises:
            UsageError: If the options are invalid for this document
            ParseError: If the document metadata is inconsistent
            ToolError: If an external tool is missing or fails
            PaddingError: If the padding page is not a book page
        """
        self.toolkit.check_available()

        with self._work_directory(options.keep_temp) as work_dir:
            self.work_dir = work_dir
            namer = FileNamer(work_dir)

            metadata, pages = BurstService(self.toolkit).burst(options.input_path, work_dir)
            total = metadata.page_count

            validation = OptionsValidator.validate_single_pages(options.single_pages, total)
            if not validation.is_valid:
                raise UsageError("; ".join(validation.errors))
            if validation.has_issues():
                log.warning("Single pages '%s': %s", options.single_pages, validation.get_summary())
                for warning in validation.warnings:
                    log.warning(warning)

            single_pages = parse_page_range(options.single_pages, total)
            log.info(
                "Processing %s -> %s with %d pages, keeping whole %s",
                options.input_path, options.output_path, total,
                format_page_set(single_pages) or "none",
            )

            splitter = SplitService(self.toolkit.cropper, self.toolkit.probe, namer)
            pages = splitter.split_pages(pages, single_pages)
            book_pages = len(pages)

            page_size = ResizeService(self.toolkit.resizer, namer).normalize(pages)

            pages = PaddingService(namer).pad(
                pages, options.padding_page, options.padding_position
            )

            self.assemble(pages, work_dir, options.output_path)

        return BookletResult(
            physical_pages=total,
            single_pages=sorted(single_pages),
            split_pages=total - len(single_pages),
            page_size=page_size,
            padding_added=len(pages) - book_pages,
            final_pages=len(pages),
            output_path=options.output_path,
        )

    def assemble(self, pages: List[Page], work_dir: Path, output_path: Path) -> Path:
        """
        Join, impose and crop the pages into the output file.

        Args:
            pages: Final page sequence in reading order
            work_dir: Directory for intermediate files
            output_path: Where the booklet is written

        Returns:
            The output path
        """
        joined = work_dir / "joined.pdf"
        imposed = work_dir / "imposed.pdf"
        cropped = work_dir / "cropped.pdf"

        self.toolkit.concatenator.concatenate([page.path for page in pages], joined)
        for page in pages:
            page.discard()

        self.toolkit.imposer.impose(joined, imposed)
        self.toolkit.cropper.crop(imposed, cropped)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(str(cropped), str(output_path))
        log.debug("Moved %s to %s", cropped, output_path)
        return output_path

    @contextmanager
    def _work_directory(self, keep: bool) -> Iterator[Path]:
        """Temporary directory for the run, removed afterwards unless kept."""
        if keep:
            path = Path(tempfile.mkdtemp(prefix="pdf-booklet-"))
            log.info("Keeping intermediate files in %s", path)
            yield path
            return

        with tempfile.TemporaryDirectory(prefix="pdf-booklet-") as tmpdir:
            log.debug("Using temporary directory %s", tmpdir)
            yield Path(tmpdir)
