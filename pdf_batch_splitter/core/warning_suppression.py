"""
Quiet pypdf's structural chatter during a batch run.
File: pdf_batch_splitter/core/warning_suppression.py

pypdf complains about many harmless problems (broken outlines, wrong
pointing objects, fonts without widths) through both its logger and
the warnings module, and text extraction repeats them for every page.
A WarningTally is shared by every pypdf call of one document, so a
hundred-page batch ends with one line such as

    Suppressed 212 pypdf warnings while reading batch.pdf (wrong pointing object x180, ...)

instead of a screen of noise. Lines that match none of the known noise
patterns are passed through unchanged.
"""

import io
import sys
import warnings

from collections import Counter
from typing import Optional
from contextlib import contextmanager, redirect_stderr
from rich.console import Console
from rich.markup import escape


console = Console()


# Lower-case fragments of messages that never mean the split went wrong
NOISE_PATTERNS = (
    "wrong pointing object",
    "object stream not found",
    "invalid destination",
    "broken outline",
    "multiple definitions",
    "stream length invalid",
    "impossible to decode",
    "advanced encoding",
    "unknown widths",
    "could not find xref table",
)


class WarningTally:
    """Counts suppressed warnings by the noise pattern they matched."""

    def __init__(self):
        self.counts = Counter()

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def absorb(self, message: str) -> bool:
        """Count the message and return True if it is known noise."""
        lowered = message.lower()
        for pattern in NOISE_PATTERNS:
            if pattern in lowered:
                self.counts[pattern] += 1
                return True
        return False

    def summary(self, source_name: str = None) -> Optional[str]:
        if not self.counts:
            return None

        noun = "warning" if self.total == 1 else "warnings"
        where = f" while reading {source_name}" if source_name else ""
        top = ", ".join(f"{pattern} x{count}" for pattern, count in self.counts.most_common(3))
        return f"Suppressed {self.total} pypdf {noun}{where} ({top})"

    def report(self, source_name: str = None):
        """Print the summary once and start counting from zero."""
        summary = self.summary(source_name)
        if summary:
            console.print(f"[dim]{escape(summary)}[/dim]")
        self.counts.clear()


class _TallyingStderr(io.StringIO):
    """Stand-in stderr that counts noise lines and forwards the rest."""

    def __init__(self, tally: WarningTally, target):
        super().__init__()
        self.tally = tally
        self.target = target

    def write(self, text: str) -> int:
        for line in text.splitlines(keepends=True):
            if line.strip() and not self.tally.absorb(line):
                self.target.write(line)
        return len(text)


@contextmanager
def suppress_pdf_warnings(tally: WarningTally = None):
    """
    Route pypdf warnings raised inside the block into a tally.

    Pass the same tally to every call made for one document to get a
    single count for the whole run. Warnings that are not known noise
    are re-issued after the block.

    Usage:
        tally = WarningTally()
        with suppress_pdf_warnings(tally):
            text = reader.pages[0].extract_text()
        tally.report("batch.pdf")
    """
    tally = tally if tally is not None else WarningTally()

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        with redirect_stderr(_TallyingStderr(tally, sys.stderr)):
            yield tally

    for warning in caught:
        if not tally.absorb(str(warning.message)):
            warnings.warn_explicit(warning.message, warning.category, warning.filename, warning.lineno)


# End of file #
