"""
Scanned book to printable booklet converter.

This package holds the page accounting (ranges, metadata, splitting, padding)
and the adapters around the external PDF tools that do the real work.
"""

__version__ = "1.0.0"
