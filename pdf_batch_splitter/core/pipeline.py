"""
Batch pipeline: split a PDF into single pages named from their content.
File: pdf_batch_splitter/core/pipeline.py

Flow per page, strictly in page order:
    extract -> resolve identifiers -> assign filename -> apply
    collision strategy -> save -> release page

Configuration problems are reported before the document is opened.
Document read errors, save errors and rule defects abort the run;
pages written before the failure stay on disk.
"""

import os

from pathlib import Path
from typing import Optional
from dataclasses import dataclass, field

from pdf_batch_splitter.constants import DEFAULT_SEPARATOR, DEFAULT_SUFFIX
from pdf_batch_splitter.core.page import Page
from pdf_batch_splitter.core.rules import IdentifierRule
from pdf_batch_splitter.core.resolver import resolve
from pdf_batch_splitter.core.naming import assign_filename
from pdf_batch_splitter.core.regex_patterns import PATH_SEPARATOR_RGX
from pdf_batch_splitter.core.document import DocumentEngine, PyPDFEngine
from pdf_batch_splitter.core.exceptions import ConfigurationError
from pdf_batch_splitter.core.file_conflicts import ConflictResolutionStrategy, resolve_collision


@dataclass(frozen=True)
class SplitOptions:
    """Naming and output settings for one run."""
    prefix: str
    suffix: str = DEFAULT_SUFFIX
    separator: str = DEFAULT_SEPARATOR
    collision_policy: str = ConflictResolutionStrategy.OVERWRITE
    sanitize: bool = False
    dry_run: bool = False

    def validate(self):
        """Raise ConfigurationError for settings a run cannot use."""
        if not self.prefix or not self.prefix.strip():
            raise ConfigurationError("Filename prefix must not be empty", 'prefix', self.prefix)

        if not self.suffix or not self.suffix.strip('. '):
            raise ConfigurationError("Filename suffix must not be empty", 'suffix', self.suffix)

        if len(self.separator) != 1:
            raise ConfigurationError(f"Separator must be a single character, got '{self.separator}'",
                                        'separator', self.separator)

        for setting in ('prefix', 'suffix', 'separator'):
            value = getattr(self, setting)
            if PATH_SEPARATOR_RGX.search(value):
                raise ConfigurationError(f"Filename {setting} must not contain a path separator, got '{value}'",
                                            setting, value)

        if self.collision_policy not in ConflictResolutionStrategy.ALL:
            raise ConfigurationError(f"Unknown collision policy '{self.collision_policy}' "
                                        f"(expected one of {', '.join(ConflictResolutionStrategy.ALL)})",
                                        'collision_policy', self.collision_policy)

    @property
    def extension(self) -> str:
        """Suffix without a leading dot ('.pdf' and 'pdf' are both accepted)."""
        return self.suffix.strip().lstrip('.')


@dataclass
class PageOutcome:
    index: int
    filename: str
    resolved: bool
    written: bool


@dataclass
class BatchResult:
    """Counts and per-page outcomes of one pipeline run."""
    destination: Path
    dry_run: bool = False
    written_count: int = 0
    failed_count: int = 0           # pages with no identifier, not write failures
    outcomes: list[PageOutcome] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.outcomes)

    def record(self, page: Page, output_path: Path, written: bool):
        self.outcomes.append(PageOutcome(page.index, output_path.name, page.resolved, written))
        if written:
            self.written_count += 1
        if not page.resolved:
            self.failed_count += 1


def validate_paths(source: Path, destination: Path):
    """
    Check the source document and destination folder before a run.

    Raises:
        ConfigurationError: If the source is not a readable file or the
            destination is not a writable directory
    """
    if not source.exists():
        raise ConfigurationError(f"Source file {source} does not exist", 'source', source)
    if not source.is_file():
        raise ConfigurationError(f"Source {source} is not a file", 'source', source)
    if not os.access(source, os.R_OK):
        raise ConfigurationError(f"Source file {source} is not readable", 'source', source)

    if not destination.exists():
        raise ConfigurationError(f"Destination {destination} does not exist", 'destination', destination)
    if not destination.is_dir():
        raise ConfigurationError(f"Destination {destination} is not a directory", 'destination', destination)
    if not os.access(destination, os.W_OK):
        raise ConfigurationError(f"Destination {destination} is not writable", 'destination', destination)


def run(source: Path, rules: list[IdentifierRule], destination: Path, prefix: str,
        suffix: str = DEFAULT_SUFFIX, *,
        engine: Optional[DocumentEngine] = None,
        separator: str = DEFAULT_SEPARATOR,
        collision_policy: str = ConflictResolutionStrategy.OVERWRITE,
        sanitize: bool = False,
        dry_run: bool = False) -> BatchResult:
    """
    Split a document into one named file per page.

    Args:
        source: Multi-page source document
        rules: Ordered identifier rules; the first match names the page
        destination: Existing, writable output directory
        prefix: Prefix for files named from an identifier
        suffix: Output file extension
        engine: Document engine (defaults to PyPDFEngine)
        separator: Single character between prefix and identifier parts
        collision_policy: 'overwrite' (default), 'rename' or 'fail'
        sanitize: Strip non-alphanumeric characters from identifiers
        dry_run: Work out every filename without writing anything

    Returns:
        BatchResult with written/unresolved counts and per-page outcomes

    Raises:
        ConfigurationError: Invalid settings or paths; nothing was read
        InvalidRuleError: A rule's capture group is missing from its match
        OSError: The document could not be read or a page could not be saved
    """
    options = SplitOptions(prefix, suffix, separator, collision_policy, sanitize, dry_run)
    options.validate()

    if not rules:
        raise ConfigurationError("At least one identifier rule is required", 'rules', rules)

    source = Path(source)
    destination = Path(destination)
    validate_paths(source, destination)

    return _split(source, list(rules), destination, options, engine or PyPDFEngine())


def _split(source: Path, rules: list[IdentifierRule], destination: Path,
            options: SplitOptions, engine: DocumentEngine) -> BatchResult:
    result = BatchResult(destination=destination, dry_run=options.dry_run)
    failures = 0
    taken = set()

    document = engine.open_document(source)
    try:
        for index, (page_handle, text) in enumerate(engine.extract_pages(document)):
            try:
                page = resolve(Page(index, text), rules)
                filename, failures = assign_filename(page, options.prefix, options.extension, failures,
                                                        options.separator, options.sanitize)
                output_path = resolve_collision(destination / filename, options.collision_policy, taken)
                taken.add(output_path)

                if not options.dry_run:
                    engine.save_page(page_handle, output_path)
            finally:
                engine.close_page(page_handle)

            result.record(page, output_path, written=not options.dry_run)
    finally:
        engine.close_document(document)

    return result


# End of file #
