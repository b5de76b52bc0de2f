"""
Exception types for batch splitting operations.
File: pdf_batch_splitter/core/exceptions.py
"""


class SplitterError(Exception):
    """Base class for errors raised by the batch splitter."""


class ConfigurationError(SplitterError, ValueError):
    """
    Raised when a run is configured in a way that cannot start.

    This exception is raised when:
    - The filename prefix or suffix is empty or blank
    - No identifier rules are supplied
    - The destination is missing, not a directory, or not writable
    - The source document is missing or unreadable

    Always raised before the document engine is touched.
    """

    def __init__(self, message, setting=None, value=None):
        """
        Initialize configuration error.

        Args:
            message: Human-readable description of the problem
            setting: Name of the offending setting (e.g. 'prefix')
            value: The rejected value
        """
        self.setting = setting
        self.value = value
        super().__init__(message)


class InvalidRuleError(SplitterError, ValueError):
    """
    Raised when an identifier rule is defective.

    Covers patterns that do not compile, non-positive capture groups,
    malformed rule definitions, and capture groups that do not exist
    in a successful match. Fatal to the whole run.
    """

    def __init__(self, rule_label, message, page_index=None):
        """
        Initialize invalid rule error.

        Args:
            rule_label: Label of the rule (or raw definition) at fault
            message: Description of the defect
            page_index: Zero-based page being resolved, if at match time
        """
        self.rule_label = rule_label
        self.reason = message
        self.page_index = page_index

        base_msg = f"Invalid rule '{rule_label}': {message}"
        if page_index is not None:
            base_msg += f" (page {page_index + 1})"
        super().__init__(base_msg)


class DocumentReadError(OSError):
    """Raised when the source document cannot be opened or parsed."""

    def __init__(self, filepath, reason=None):
        self.filepath = filepath
        self.reason = reason

        base_msg = f"Could not read document: {filepath}"
        if reason:
            base_msg += f" ({reason})"
        super().__init__(base_msg)


class FileConflictError(FileExistsError):
    """
    Raised when an output filename is already taken and the
    collision strategy does not allow overwriting it.

    Inherits from FileExistsError so it aborts a run the same way
    any other write failure does.
    """

    def __init__(self, filepath, strategy=None, message=None):
        """
        Initialize file conflict error.

        Args:
            filepath: Path or str of the conflicting file
            strategy: The collision strategy in effect
            message: Custom error message
        """
        self.filepath = filepath
        self.strategy = strategy

        if message:
            super().__init__(message)
        else:
            base_msg = f"File conflict: {filepath}"
            if strategy:
                base_msg += f" (strategy: {strategy})"
            super().__init__(base_msg)


# End of file #
