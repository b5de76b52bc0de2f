"""
Core splitting logic: rules, identifier resolution, naming and the batch pipeline.
File: pdf_batch_splitter/core/__init__.py
"""

from pdf_batch_splitter.core.page import Page
from pdf_batch_splitter.core.rules import IdentifierRule, DEFAULT_RULES
from pdf_batch_splitter.core.resolver import resolve
from pdf_batch_splitter.core.naming import assign_filename
from pdf_batch_splitter.core.pipeline import run, BatchResult, SplitOptions
from pdf_batch_splitter.core.exceptions import (
    ConfigurationError,
    InvalidRuleError,
    DocumentReadError,
    FileConflictError
)


__all__ = [
    'Page',
    'IdentifierRule',
    'DEFAULT_RULES',
    'resolve',
    'assign_filename',
    'run',
    'BatchResult',
    'SplitOptions',
    'ConfigurationError',
    'InvalidRuleError',
    'DocumentReadError',
    'FileConflictError'
]

# End of file #
