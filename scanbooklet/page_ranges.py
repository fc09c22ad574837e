"""
Printer-style page range parsing.

A range spec is a comma separated list of single pages and inclusive
ranges, e.g. "1,2,12-15,24". Negative numbers count from the end, so
"-1" is the last page and "1--1" (the second '-' is a unary minus) is
every page.
"""

import re
from typing import Iterable, List, Set, Tuple

from .errors import PageRangeError

# The second number keeps its own sign: "1--1" is 1 .. -1
RANGE_TOKEN = re.compile(r"(-?\d+)-(-?\d+)")
SINGLE_TOKEN = re.compile(r"-?\d+")


def resolve_index(index: int, total: int) -> int:
    """
    Resolve an end-relative index against a page count.

    Examples:
        resolve_index(3, 10) -> 3
        resolve_index(-1, 10) -> 10
        resolve_index(-3, 10) -> 8
    """
    if index < 0:
        return total + index + 1
    return index


def parse_range_tokens(spec: str) -> List[Tuple[int, int]]:
    """
    Split a range spec into raw (start, stop) pairs, before resolution.

    Single pages become (n, n). Empty tokens are ignored.

    Raises:
        PageRangeError: If a token is neither a number nor a range
    """
    tokens = []
    for part in spec.split(','):
        part = part.strip()
        if not part:
            continue

        match = RANGE_TOKEN.fullmatch(part)
        if match:
            tokens.append((int(match.group(1)), int(match.group(2))))
        elif SINGLE_TOKEN.fullmatch(part):
            tokens.append((int(part), int(part)))
        else:
            raise PageRangeError(f"Invalid page range '{part}' in '{spec}'")

    return tokens


def parse_page_range(spec: str, total: int) -> Set[int]:
    """
    Expand a range spec into the set of 1-indexed pages it denotes.

    Ranges whose resolved start lies after their stop are empty, and
    resolved pages outside 1..total are dropped.

    Args:
        spec: Range spec (e.g. "1,-1" or "2,4-6,-1")
        total: Number of pages the negative indices count back from

    Returns:
        Set of page numbers within 1..total

    Examples:
        "1,-1", 10 -> {1, 10}
        "1--1", 4 -> {1, 2, 3, 4}
        "2,4-6,-1", 10 -> {2, 4, 5, 6, 10}
    """
    pages = set()
    for start, stop in parse_range_tokens(spec):
        start = resolve_index(start, total)
        stop = resolve_index(stop, total)
        pages.update(range(max(start, 1), min(stop, total) + 1))
    return pages


def format_page_set(pages: Iterable[int]) -> str:
    """Render pages sorted and comma separated, e.g. "1,2,10"."""
    return ",".join(str(page) for page in sorted(pages))
