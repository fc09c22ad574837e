#!/usr/bin/env python3
"""
Scanned Book Booklet Converter

Cuts and reassembles scanned books so they can be printed, collated and
stapled in the center as a booklet.

Such scans usually have a single front cover page, then pages holding the
two facing book pages side by side, and a single back cover page. The pages
in the middle are split in half vertically, all pages are brought to one
size, the count is padded to a multiple of four, and the result is imposed
for booklet printing.

The actual PDF work is done by pdftk, pdfcrop, Ghostscript and pdfjam.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from scanbooklet.config import EXIT_FAILURE, EXIT_SUCCESS
from scanbooklet.errors import BookletError, UsageError
from scanbooklet.models import BookletDefaults, BookletOptions, PaddingPosition
from scanbooklet.page_ranges import parse_range_tokens
from scanbooklet.services import BookletService, ConfigService
from scanbooklet.tools import PdfToolkit
from scanbooklet.validators import OptionsValidator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert a scanned book PDF into a print-ready booklet.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Page ranges use the format common to printers: a comma-separated list of
single pages or ranges, e.g. 1,2,12-15,24. Negative numbers count from the
end, so the default "1,-1" keeps the first and last page whole, and "1--1"
(the second '-' is a unary minus) splits no page at all.

Examples:
  %(prog)s -i scan.pdf
  %(prog)s -i scan.pdf -o print.pdf -s 1,2,-1
  %(prog)s -i scan.pdf --padding-position back --padding-page 2
        """
    )

    parser.add_argument('-i', '--input', help='Input PDF (required)')
    parser.add_argument('-o', '--output',
                        help='Output PDF (default: input name with "-printable" before .pdf)')
    parser.add_argument('-s', '--single-pages', metavar='PAGERANGE',
                        help='Pages not to split in half (default: 1,-1)')
    parser.add_argument('--padding-position', choices=[p.value for p in PaddingPosition],
                        help='Where padding pages go (default: split)')
    parser.add_argument('-p', '--padding-page', type=int,
                        help='Book page duplicated for padding, negative counts from the end '
                             '(default: -1)')
    parser.add_argument('--keep-temp', action='store_true',
                        help='Keep the intermediate files and print their location')
    parser.add_argument('--config', type=Path,
                        help='Defaults file (default: ~/.config/pdf-booklet/config.json)')
    parser.add_argument('--save-defaults', action='store_true',
                        help='Store the page range and padding settings as new defaults')
    parser.add_argument('--reset-defaults', action='store_true',
                        help='Delete the stored defaults and exit')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Show every external command')

    return parser


def merge_defaults(args: argparse.Namespace, defaults: BookletDefaults) -> BookletDefaults:
    """Command-line values override stored defaults."""
    return BookletDefaults(
        single_pages=args.single_pages if args.single_pages is not None else defaults.single_pages,
        padding_position=(PaddingPosition(args.padding_position)
                          if args.padding_position else defaults.padding_position),
        padding_page=args.padding_page if args.padding_page is not None else defaults.padding_page,
        output_suffix=defaults.output_suffix,
    )


def build_options(args: argparse.Namespace, settings: BookletDefaults) -> BookletOptions:
    """
    Resolve paths and settings into the options of one run.

    Raises:
        UsageError: If the input is missing or the paths are unusable
    """
    if not args.input:
        raise UsageError("No input given. Try --help")

    input_path = Path(args.input)
    if args.output:
        output_path = Path(args.output)
    else:
        output_path = BookletOptions.default_output_path(input_path, settings.output_suffix)

    for result in (OptionsValidator.validate_input_path(input_path),
                   OptionsValidator.validate_output_path(output_path, input_path)):
        if not result.is_valid:
            raise UsageError("; ".join(result.errors))

    try:
        return BookletOptions(
            input_path=input_path,
            output_path=output_path,
            single_pages=settings.single_pages,
            padding_position=settings.padding_position,
            padding_page=settings.padding_page,
            keep_temp=args.keep_temp,
        )
    except ValueError as e:
        raise UsageError(str(e)) from e


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    config_service = ConfigService(args.config)
    if args.reset_defaults:
        if config_service.reset_to_defaults():
            print(f"Removed defaults file {config_service.get_config_path()}")
        else:
            print("No stored defaults to remove")
        sys.exit(EXIT_SUCCESS)

    try:
        settings = merge_defaults(args, config_service.load())
        if args.save_defaults:
            parse_range_tokens(settings.single_pages)
            config_service.save(settings)
            print(f"Defaults saved to {config_service.get_config_path()}")
            if not args.input:
                sys.exit(EXIT_SUCCESS)

        options = build_options(args, settings)
        print(f"Input PDF: {options.input_path.name}")

        result = BookletService(PdfToolkit.external()).generate(options)

    except (BookletError, ValueError) as e:
        print(f"\nError: {e}")
        sys.exit(EXIT_FAILURE)

    print(result.get_summary())
    print(f"Booklet written to {result.output_path}")
    sys.exit(EXIT_SUCCESS)


if __name__ == "__main__":
    main()
