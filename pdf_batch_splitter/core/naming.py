"""
Output filename assignment for split pages.
File: pdf_batch_splitter/core/naming.py

Resolved pages are named <prefix><sep><composite>.<suffix>. Unresolved
pages get AAA_FAILED_TO_READ_<n>.<suffix>, where n counts unresolved
pages in page order across the whole run.

Identifiers come from document text, so any "/" or "\\" in them is
replaced before the name is built; a page can only ever name a file
inside the destination folder.
"""

from pdf_batch_splitter.core.page import Page
from pdf_batch_splitter.core.regex_patterns import NON_ALNUM_RGX, PATH_SEPARATOR_RGX
from pdf_batch_splitter.constants import DEFAULT_SEPARATOR, FAILED_PAGE_PREFIX


def sanitize_identifier(identifier: str, separator: str = DEFAULT_SEPARATOR) -> str:
    """
    Strip everything except ASCII letters and digits from an identifier.

    Separator characters between identifier parts are kept.

    Examples:
        "Smith, John" -> "SmithJohn"
        "42_AB-9" -> "42_AB9"
    """
    parts = [NON_ALNUM_RGX.sub('', part) for part in identifier.split(separator)]
    clean = separator.join(part for part in parts if part)
    return clean if clean else "unknown"


def flatten_path_separators(identifier: str, replacement: str = "-") -> str:
    """Replace directory separators so the identifier stays one path component."""
    return PATH_SEPARATOR_RGX.sub(replacement, identifier)


def failed_filename(failure_number: int, suffix: str) -> str:
    return f"{FAILED_PAGE_PREFIX}{failure_number}.{suffix}"


def assign_filename(page: Page, prefix: str, suffix: str, failures: int,
                    separator: str = DEFAULT_SEPARATOR,
                    sanitize: bool = False) -> tuple[str, int]:
    """
    Produce the output filename for a resolved or unresolved page.

    The failure counter is passed in and handed back rather than kept
    in module state, so the caller threads it through the run.

    Args:
        page: Page after identifier resolution
        prefix: Filename prefix for resolved pages
        suffix: File extension without the dot
        failures: Unresolved pages seen so far in this run
        separator: Character between prefix and identifier parts
        sanitize: Strip non-alphanumeric characters from the identifier

    Returns:
        Tuple of (filename, updated failure count)
    """
    if not page.resolved:
        failures += 1
        return failed_filename(failures, suffix), failures

    identifier = page.composite_identifier(separator)
    identifier = flatten_path_separators(identifier)
    if sanitize:
        identifier = sanitize_identifier(identifier, separator)

    return f"{prefix}{separator}{identifier}.{suffix}", failures


# End of file #
