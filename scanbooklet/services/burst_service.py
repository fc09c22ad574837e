"""
Burst Service - Explodes the input PDF into one Page per physical page.
"""

import logging
from pathlib import Path
from typing import List, Tuple

from ..errors import ParseError
from ..metadata import parse_document_metadata
from ..models import DocumentMetadata, Page
from ..tools import PdfToolkit

log = logging.getLogger(__name__)


class BurstService:
    """
    Runs the burst tool and pairs its files with the parsed metadata.

    Physical pages start out with known dimensions taken from the
    metadata, so only derived pages ever need to be measured.
    """

    def __init__(self, toolkit: PdfToolkit):
        self.toolkit = toolkit

    def burst(self, source: Path, work_dir: Path) -> Tuple[DocumentMetadata, List[Page]]:
        """
        Burst a PDF into single-page files.

        Args:
            source: Input PDF
            work_dir: Directory that receives the page files

        Returns:
            Tuple of (document metadata, pages in document order)

        Raises:
            ParseError: If the metadata and the burst files disagree
        """
        result = self.toolkit.burster.burst(source, work_dir)
        metadata = parse_document_metadata(result.metadata_text)

        if metadata.page_count < 1:
            raise ParseError(f"{source} has no pages")
        if len(result.page_files) != metadata.page_count:
            raise ParseError(
                f"Metadata declares {metadata.page_count} page(s) "
                f"but the burst produced {len(result.page_files)} file(s)"
            )

        pages = []
        for number, path in enumerate(result.page_files, start=1):
            entry = metadata.page(number)
            if entry is None:
                raise ParseError(f"Metadata has no entry for page {number}")
            pages.append(Page(path, self.toolkit.probe.measure, entry.dimensions))

        log.debug("Burst %s into %d page(s)", source, len(pages))
        return metadata, pages
