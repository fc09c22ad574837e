"""
Padding service.

A booklet folds sheets of four pages, so the page count must be a
multiple of four. Missing pages are filled with copies of one chosen book
page, placed next to the front cover, next to the back cover, or
alternating between the two.
"""

import logging
from typing import List

from ..config import PAGES_PER_SHEET
from ..errors import PaddingError
from ..models import FileNamer, Page, PaddingPosition
from ..page_ranges import resolve_index

log = logging.getLogger(__name__)


class PaddingService:
    """Service for padding the page sequence to whole sheets."""

    def __init__(self, namer: FileNamer):
        self.namer = namer

    @staticmethod
    def padding_needed(page_count: int) -> int:
        """Number of pages missing to reach a multiple of four."""
        return (PAGES_PER_SHEET - page_count % PAGES_PER_SHEET) % PAGES_PER_SHEET

    @staticmethod
    def plan_insert_positions(page_count: int, position: PaddingPosition) -> List[int]:
        """
        Calculate where each padding page is inserted.

        Positions are list indices applied one after another: front
        inserts go to index 1 (after the front cover) and back inserts to
        the index just before the current last page. In SPLIT mode the
        copies alternate starting at the front, so an odd count puts the
        extra copy at the front.

        Args:
            page_count: Number of pages before padding
            position: Placement mode

        Returns:
            Insert index for each padding page, in insertion order

        Example:
            >>> PaddingService.plan_insert_positions(10, PaddingPosition.SPLIT)
            [1, 10]
        """
        positions = []
        length = page_count

        for i in range(PaddingService.padding_needed(page_count)):
            if position == PaddingPosition.FRONT:
                at_front = True
            elif position == PaddingPosition.BACK:
                at_front = False
            else:
                at_front = i % 2 == 0

            positions.append(min(1, length) if at_front else max(length - 1, 0))
            length += 1

        return positions

    def pad(self, pages: List[Page], padding_page: int, position: PaddingPosition) -> List[Page]:
        """
        Insert copies of a book page until the count is a multiple of four.

        Args:
            pages: Page sequence after splitting and resizing
            padding_page: 1-indexed book page to copy, negative counts from the end
            position: Placement mode

        Returns:
            Padded page sequence (a new list)

        Raises:
            PaddingError: If padding is needed and padding_page is not a book page
        """
        result = list(pages)
        positions = self.plan_insert_positions(len(pages), position)
        if not positions:
            return result

        source_number = resolve_index(padding_page, len(pages))
        if not 1 <= source_number <= len(pages):
            raise PaddingError(
                f"Padding page {padding_page} is outside the book's pages 1-{len(pages)}"
            )
        source = pages[source_number - 1]

        for index in positions:
            result.insert(index, source.copy_to(self.namer.allocate("pad")))

        log.debug(
            "Added %d copies of page %d at %s", len(positions), source_number, positions
        )
        return result
