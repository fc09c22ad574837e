"""
Resize Service - Brings every page to one common size.

Imposition needs uniform pages. The common size is the smallest width and
the smallest height found, so no page is ever scaled up; larger pages lose
a little at their edges instead.
"""

import logging
from typing import List

from ..models import FileNamer, Page, PageDimensions
from ..tools import Resizer

log = logging.getLogger(__name__)


class ResizeService:

    def __init__(self, resizer: Resizer, namer: FileNamer):
        self.resizer = resizer
        self.namer = namer

    @staticmethod
    def common_size(pages: List[Page]) -> PageDimensions:
        """Minimum width and minimum height over all pages."""
        if not pages:
            raise ValueError("Cannot compute a common size of no pages")

        return PageDimensions(
            width=min(page.width for page in pages),
            height=min(page.height for page in pages),
        )

    def normalize(self, pages: List[Page]) -> PageDimensions:
        """
        Resize every page to the common size, in place.

        Pages that already have the common size are left untouched.

        Returns:
            The common size
        """
        target = self.common_size(pages)
        resized = 0

        for page in pages:
            if page.dimensions.matches(target):
                continue

            destination = self.namer.allocate("sized")
            self.resizer.resize(page.path, destination, target)
            page.replace_file(destination)
            resized += 1

        log.debug("Resized %d of %d page(s) to %s", resized, len(pages), target)
        return target
