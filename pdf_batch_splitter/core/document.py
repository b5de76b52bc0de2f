"""
Document engine: open a PDF, hand out its pages one at a time, save them.
File: pdf_batch_splitter/core/document.py

The pipeline only talks to the DocumentEngine interface. PyPDFEngine is
the real implementation; tests substitute an in-memory engine.
"""

import struct
import zlib

from pathlib import Path
from typing import BinaryIO, Iterator, Optional
from dataclasses import dataclass, field

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PyPdfError

from pdf_batch_splitter.core.exceptions import DocumentReadError
from pdf_batch_splitter.core.warning_suppression import WarningTally, suppress_pdf_warnings


class DocumentEngine:
    """
    Interface between the batch pipeline and a document library.

    Implementations must extract pages in document order, starting at
    index 0, and make close_page/close_document safe to call twice.
    """

    def open_document(self, path: Path):
        """Open the source document. Raises DocumentReadError."""
        raise NotImplementedError

    def extract_pages(self, document) -> Iterator[tuple[object, str]]:
        """Yield (page_handle, text) for each page in order."""
        raise NotImplementedError

    def save_page(self, page_handle, output_path: Path):
        """Persist one page. Raises OSError on failure."""
        raise NotImplementedError

    def close_page(self, page_handle):
        raise NotImplementedError

    def close_document(self, document):
        raise NotImplementedError


# Exceptions pypdf is known to leak from malformed files besides its own
PDF_PARSE_ERRORS = (PyPdfError, ValueError, KeyError, TypeError, AttributeError, IndexError,
                    AssertionError, RecursionError, struct.error, zlib.error)


@dataclass
class PyPDFDocument:
    path: Path
    stream: Optional[BinaryIO]
    reader: Optional[PdfReader]
    warnings: WarningTally = field(default_factory=WarningTally)

    @property
    def closed(self) -> bool:
        return self.stream is None


@dataclass
class PyPDFPage:
    index: int
    writer: Optional[PdfWriter]
    warnings: WarningTally = field(default_factory=WarningTally)

    @property
    def closed(self) -> bool:
        return self.writer is None


class PyPDFEngine(DocumentEngine):
    """
    DocumentEngine backed by pypdf.

    Warnings pypdf raises for one document are counted in a single
    WarningTally and summarized once, when the document is closed.
    """

    def __init__(self, copy_metadata: bool = True, password: str = "", show_warning_summary: bool = True):
        self.copy_metadata = copy_metadata
        self.password = password
        self.show_warning_summary = show_warning_summary

    def open_document(self, path: Path) -> PyPDFDocument:
        path = Path(path)
        try:
            stream = open(path, 'rb')
        except OSError as e:
            raise DocumentReadError(path, e.strerror or str(e)) from e

        tally = WarningTally()
        try:
            with suppress_pdf_warnings(tally):
                reader = PdfReader(stream)
                if reader.is_encrypted and not reader.decrypt(self.password):
                    raise DocumentReadError(path, "Encrypted PDF, password required")
                len(reader.pages)   # parse the page tree now, not mid-batch
        except DocumentReadError:
            stream.close()
            raise
        except PDF_PARSE_ERRORS as e:
            stream.close()
            raise DocumentReadError(path, f"{type(e).__name__}: {e}") from e
        except BaseException:
            stream.close()
            raise

        return PyPDFDocument(path, stream, reader, tally)

    def page_count(self, document: PyPDFDocument) -> int:
        return len(document.reader.pages)

    def extract_pages(self, document: PyPDFDocument) -> Iterator[tuple[PyPDFPage, str]]:
        """
        Yield each page as its own single-page writer plus its text.

        Pages are built lazily, so only the page currently being
        processed is held as a separate document.
        """
        reader = document.reader

        for index, page in enumerate(reader.pages):
            try:
                with suppress_pdf_warnings(document.warnings):
                    text = page.extract_text() or ""

                    writer = PdfWriter()
                    writer.add_page(page)
                    if self.copy_metadata and reader.metadata:
                        writer.add_metadata(reader.metadata)
            except PDF_PARSE_ERRORS as e:
                raise DocumentReadError(document.path, f"page {index + 1}: {type(e).__name__}: {e}") from e

            yield PyPDFPage(index, writer, document.warnings), text

    def page_text(self, document: PyPDFDocument, index: int) -> str:
        """Extracted text of one page (zero-based index)."""
        try:
            with suppress_pdf_warnings(document.warnings):
                return document.reader.pages[index].extract_text() or ""
        except PDF_PARSE_ERRORS as e:
            raise DocumentReadError(document.path, f"page {index + 1}: {type(e).__name__}: {e}") from e

    def save_page(self, page_handle: PyPDFPage, output_path: Path):
        if page_handle.closed:
            raise ValueError(f"Page {page_handle.index + 1} was already released")

        with suppress_pdf_warnings(page_handle.warnings):
            with open(output_path, 'wb') as output_file:
                page_handle.writer.write(output_file)

    def close_page(self, page_handle: PyPDFPage):
        page_handle.writer = None

    def close_document(self, document: PyPDFDocument):
        if document.closed:
            return
        document.stream.close()
        document.stream = None
        document.reader = None

        if self.show_warning_summary:
            document.warnings.report(document.path.name)


# End of file #
