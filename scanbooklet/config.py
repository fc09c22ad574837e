"""
Centralized configuration and constants for the booklet converter.

Defaults for the command line, file naming, and the external tools that do
the actual PDF work live here so they can be changed in one place.
"""

from pathlib import Path
from typing import Dict

# Page range of physical pages that are not split (first and last = covers)
DEFAULT_SINGLE_PAGES = "1,-1"

# Padding defaults: duplicate the last book page, spread over front and back
DEFAULT_PADDING_POSITION = "split"
DEFAULT_PADDING_PAGE = -1

# Output defaults to "<input stem>-printable.pdf"
DEFAULT_OUTPUT_SUFFIX = "-printable"
PDF_SUFFIX = ".pdf"

# Booklet signatures are folded sheets of four pages
PAGES_PER_SHEET = 4

# Digits used in generated file names (page_0001.pdf, half_0042.pdf, ...)
FILE_NUMBER_WIDTH = 4

# Dimensions closer than this (in points) are treated as equal
DIMENSION_TOLERANCE = 0.01

# Metadata file written by "pdftk burst" into the output directory
BURST_METADATA_FILE = "doc_data.txt"

# User defaults file
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "pdf-booklet" / "config.json"

# External executables
PDFTK = "pdftk"
PDFCROP = "pdfcrop"
GHOSTSCRIPT = "gs"
PDFJAM = "pdfjam"

INSTALL_HINTS: Dict[str, str] = {
    PDFTK: "Try 'sudo apt install pdftk'",
    PDFCROP: "Try 'sudo apt install texlive-extra-utils'",
    GHOSTSCRIPT: "Try 'sudo apt install ghostscript'",
    PDFJAM: "Try 'sudo apt install texlive-extra-utils'",
}

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
