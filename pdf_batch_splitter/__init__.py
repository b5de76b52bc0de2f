"""PDF Batch Splitter - Split a PDF into single pages named from their content."""

from ._version import __version__
from .cli import main

__all__ = ['main', '__version__']
