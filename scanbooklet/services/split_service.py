"""
Split Service - Cuts double-page scans into left and right halves.
"""

import logging
from typing import List, Set

from ..models import CropMargins, FileNamer, Page
from ..tools import Cropper, DimensionProbe

log = logging.getLogger(__name__)


class SplitService:
    """Splits every page that is not in the skip set."""

    def __init__(self, cropper: Cropper, probe: DimensionProbe, namer: FileNamer):
        self.cropper = cropper
        self.probe = probe
        self.namer = namer

    def split_page(self, page: Page) -> List[Page]:
        """
        Cut one page into two half-width pages.

        The original page's file is deleted; the returned halves have
        unknown dimensions until measured.

        Returns:
            [left half, right half]
        """
        width = page.width
        halves = []

        for margins in (CropMargins.left_half(width), CropMargins.right_half(width)):
            destination = self.namer.allocate("half")
            self.cropper.crop(page.path, destination, margins)
            halves.append(Page(destination, self.probe.measure))

        page.discard()
        return halves

    def split_pages(self, pages: List[Page], single_pages: Set[int]) -> List[Page]:
        """
        Split all pages except the ones kept whole.

        Args:
            pages: Physical pages in document order
            single_pages: 1-indexed physical pages that are not split

        Returns:
            New page sequence in reading order
        """
        result = []
        for number, page in enumerate(pages, start=1):
            if number in single_pages:
                result.append(page)
            else:
                log.debug("Splitting page %d (%s)", number, page)
                result.extend(self.split_page(page))

        return result
