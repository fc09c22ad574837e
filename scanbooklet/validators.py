"""
Validators for booklet conversion options.

These checks run before any external tool is invoked (paths) or right
after the page count is known (page ranges), and collect helpful error
and warning messages for the user.
"""

from pathlib import Path

from .config import PDF_SUFFIX
from .errors import PageRangeError
from .models import ValidationResult
from .page_ranges import parse_page_range, parse_range_tokens, resolve_index


class OptionsValidator:
    """Validates conversion options."""

    @staticmethod
    def validate_input_path(input_path: Path) -> ValidationResult:
        """
        Validate the input PDF path.

        Args:
            input_path: Path to the scanned book PDF

        Returns:
            ValidationResult with any errors
        """
        result = ValidationResult(is_valid=True)

        if input_path.suffix.lower() != PDF_SUFFIX:
            result.add_error(f"Input must be a {PDF_SUFFIX} file: {input_path}")

        if not input_path.is_file():
            result.add_error(f"Input file not found: {input_path}")

        return result

    @staticmethod
    def validate_output_path(output_path: Path, input_path: Path) -> ValidationResult:
        """Make sure the output would not overwrite the input."""
        result = ValidationResult(is_valid=True)

        if output_path.resolve() == input_path.resolve():
            result.add_error(f"Output path must differ from the input: {output_path}")

        return result

    @staticmethod
    def validate_single_pages(spec: str, total_pages: int) -> ValidationResult:
        """
        Validate the range spec of pages that are not split.

        Malformed tokens are errors. Inverted ranges and pages outside the
        document are only warnings, since they are simply ignored.

        Args:
            spec: Range spec (e.g. "1,-1")
            total_pages: Number of physical pages in the PDF

        Returns:
            ValidationResult with any errors or warnings
        """
        result = ValidationResult(is_valid=True)

        try:
            tokens = parse_range_tokens(spec)
        except PageRangeError as e:
            result.add_error(str(e))
            return result

        for start, stop in tokens:
            label = str(start) if start == stop else f"{start}-{stop}"
            first = resolve_index(start, total_pages)
            last = resolve_index(stop, total_pages)

            if first > last:
                result.add_warning(f"Range {label} is empty (resolves to {first}-{last})")
            elif first < 1 or last > total_pages:
                result.add_warning(
                    f"Range {label} reaches outside pages 1-{total_pages}, extra pages ignored"
                )

        if total_pages > 0 and len(parse_page_range(spec, total_pages)) == total_pages:
            result.add_warning("Every page is kept whole, nothing will be split")

        return result
