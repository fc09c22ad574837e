"""
Scraping of pdftk "dump_data" metadata text.

Only the handful of fields the page accounting needs are read:

    NumberOfPages: 6
    PageMediaBegin
    PageMediaNumber: 1
    PageMediaRect: 0 0 1224 792
    PageMediaDimensions: 1,224 792
    PageMediaCropRect: 0 0 1224 792
"""

import re

from .errors import ParseError
from .models import DocumentMetadata, PageDimensions, PageMetadata

# pdftk may print thousands separators ("1,224")
NUMBER = r"-?\d[\d,]*(?:\.\d+)?"
RECT = rf"\s+({NUMBER})\s+({NUMBER})\s+({NUMBER})\s+({NUMBER})"

NUMBER_OF_PAGES = re.compile(r"NumberOfPages:\s+(\d+)")
PAGE_MEDIA_NUMBER = re.compile(r"PageMediaNumber\b")
PAGE_MEDIA_DIMENSIONS = re.compile(rf"PageMediaDimensions:\s+({NUMBER})\s+({NUMBER})")
PAGE_MEDIA_CROP_RECT = re.compile(rf"PageMediaCropRect:{RECT}")
PAGE_MEDIA_RECT = re.compile(rf"PageMediaRect:{RECT}")


def _to_float(value: str) -> float:
    return float(value.replace(',', ''))


def parse_document_metadata(text: str) -> DocumentMetadata:
    """
    Parse page count and per-page dimensions of a whole document.

    Page entries are numbered in the order they appear in the text. Each
    entry runs from its PageMediaNumber field to the next one.

    Args:
        text: Metadata dump of the document

    Returns:
        DocumentMetadata with one PageMetadata per page entry

    Raises:
        ParseError: If the page count is missing, an entry has no
            dimensions, or there are more entries than declared pages
    """
    count_match = NUMBER_OF_PAGES.search(text)
    if count_match is None:
        raise ParseError("Metadata has no NumberOfPages field")
    page_count = int(count_match.group(1))

    starts = [match.start() for match in PAGE_MEDIA_NUMBER.finditer(text)]
    pages = []

    for index, start in enumerate(starts):
        number = index + 1
        if number > page_count:
            raise ParseError(
                f"Metadata lists more page entries than its {page_count} declared page(s)"
            )

        end = starts[index + 1] if index + 1 < len(starts) else len(text)
        dims_match = PAGE_MEDIA_DIMENSIONS.search(text, start, end)
        if dims_match is None:
            raise ParseError(f"Metadata entry for page {number} has no PageMediaDimensions")

        pages.append(PageMetadata(
            number=number,
            dimensions=PageDimensions(
                width=_to_float(dims_match.group(1)),
                height=_to_float(dims_match.group(2)),
            ),
        ))

    return DocumentMetadata(page_count=page_count, pages=pages)


def parse_page_dimensions(text: str) -> PageDimensions:
    """
    Parse the size of a single-page file from its metadata dump.

    The crop rectangle wins over the media rectangle. Both are read as
    "left top right bottom".

    Raises:
        ParseError: If neither rectangle is present
    """
    match = PAGE_MEDIA_CROP_RECT.search(text) or PAGE_MEDIA_RECT.search(text)
    if match is None:
        raise ParseError("Metadata has neither PageMediaCropRect nor PageMediaRect")

    left, top, right, bottom = (_to_float(value) for value in match.groups())
    return PageDimensions(width=right - left, height=bottom - top)
