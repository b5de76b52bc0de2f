"""
Page record used while splitting a document.
File: pdf_batch_splitter/core/page.py
"""

from typing import Optional
from dataclasses import dataclass, field

from pdf_batch_splitter.constants import DEFAULT_SEPARATOR
from pdf_batch_splitter.core.regex_patterns import WHITESPACE_RGX


@dataclass
class Page:
    """
    One page of the source document and the identifiers found on it.

    The page handle itself stays with the document engine; a Page only
    holds the extracted text and the identifier state used for naming.
    """
    index: int                          # zero-based position in the source document
    raw_text: str
    primary_identifier: Optional[str] = None
    additional_identifiers: list[str] = field(default_factory=list)
    resolved: bool = False

    @property
    def page_number(self) -> int:
        """One-based page number for display."""
        return self.index + 1

    def clear_identifiers(self):
        self.primary_identifier = None
        self.additional_identifiers = []
        self.resolved = False

    def add_identifier(self, identifier: str):
        """Record an identifier; the first one becomes the primary."""
        if self.resolved:
            self.additional_identifiers.append(identifier)
        else:
            self.primary_identifier = identifier
            self.resolved = True

    def composite_identifier(self, separator: str = DEFAULT_SEPARATOR) -> Optional[str]:
        """
        Assemble the identifier used in the output filename.

        With additional identifiers the parts are joined by the separator
        and every whitespace character is removed. A lone primary
        identifier is returned unchanged.
        """
        if not self.resolved:
            return None

        if not self.additional_identifiers:
            return self.primary_identifier

        joined = separator.join([self.primary_identifier] + self.additional_identifiers)
        return WHITESPACE_RGX.sub('', joined)


# End of file #
