"""PDF text extraction wrapper using pypdf.

This module provides a clean abstraction over pypdf, making it easy to
swap PDF libraries in the future without affecting the line parsers.
It produces exactly what the parsers consume: the joined text of every
page plus a flattened, trimmed, non-empty line sequence.
"""

import io
import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from typing import IO, Union

from pypdf import PdfReader

from statement_import.core.exceptions import DocumentUnreadableError
from statement_import.schemas.internal import ExtractedText

logger = logging.getLogger(__name__)

DocumentSource = Union[bytes, bytearray, str, os.PathLike, IO[bytes]]


@contextmanager
def open_document(source: DocumentSource) -> Iterator[IO[bytes]]:
    """Acquire a binary stream for `source` and release it on exit.

    Paths are opened and closed here; in-memory bytes are wrapped in
    BytesIO. File objects passed in by the caller stay open, since the
    caller owns them.

    Raises:
        DocumentUnreadableError: If the path cannot be opened or the input is empty
    """
    if isinstance(source, (bytes, bytearray)):
        if not source:
            raise DocumentUnreadableError(details={"reason": "empty document"})
        stream = io.BytesIO(bytes(source))
        try:
            yield stream
        finally:
            stream.close()
        return

    if isinstance(source, (str, os.PathLike)):
        try:
            stream = open(source, "rb")
        except OSError as e:
            raise DocumentUnreadableError(details={"reason": type(e).__name__}) from e
        try:
            yield stream
        finally:
            stream.close()
        return

    if hasattr(source, "read"):
        yield source
        return

    raise DocumentUnreadableError(details={"reason": f"unsupported source {type(source).__name__}"})


class PDFExtractor:
    """Wrapper around pypdf for statement text extraction.

    All processing happens in-memory without creating temporary files.
    The document is held open only for the duration of `extract()`.

    Example:
        >>> extractor = PDFExtractor()
        >>> extracted = extractor.extract(pdf_bytes)
        >>> extracted.lines[:3]
        ['Hang Seng Bank', 'Credit Card Statement', '05 MAR 2024 06 MAR 2024 NETFLIX.COM 93.00']
    """

    def extract(self, source: DocumentSource, password: str | None = None) -> ExtractedText:
        """Extract page text and line sequence from a PDF.

        Args:
            source: PDF bytes, a filesystem path, or a binary file object
            password: Optional password for encrypted PDFs

        Returns:
            ExtractedText with full text, lines and page count

        Raises:
            DocumentUnreadableError: If the PDF cannot be opened, decrypted or decoded
        """
        normalized_password = password.strip() if isinstance(password, str) else None
        if normalized_password == "":
            normalized_password = None

        with open_document(source) as stream:
            reader = self._open_reader(stream)
            self._unlock(reader, normalized_password)
            page_texts = self._read_pages(reader)

        logger.debug("Extracted %d pages", len(page_texts))
        return ExtractedText(
            full_text=self.get_full_text(page_texts),
            lines=self.get_lines(page_texts),
            page_count=len(page_texts),
        )

    def _open_reader(self, stream: IO[bytes]) -> PdfReader:
        try:
            return PdfReader(stream)
        except Exception as e:
            raise DocumentUnreadableError(details={"reason": type(e).__name__}) from e

    def _unlock(self, reader: PdfReader, password: str | None) -> None:
        """Decrypt an encrypted PDF in place.

        Some PDFs are encrypted but use an empty user password, so an
        empty string is tried when no password was supplied.
        """
        if not getattr(reader, "is_encrypted", False):
            return

        try:
            ok = reader.decrypt(password or "")
        except Exception as e:
            raise DocumentUnreadableError(details={"reason": type(e).__name__}) from e

        if not ok:
            if not password:
                raise DocumentUnreadableError("PARSE_003")
            raise DocumentUnreadableError("PARSE_004")

    def _read_pages(self, reader: PdfReader) -> list[str]:
        try:
            page_texts = [(page.extract_text() or "") for page in reader.pages]
        except Exception as e:
            raise DocumentUnreadableError(details={"reason": type(e).__name__}) from e

        if not page_texts:
            raise DocumentUnreadableError(details={"reason": "no pages"})
        return page_texts

    def get_full_text(self, page_texts: list[str]) -> str:
        """Concatenate all page text into a single string."""
        return "\n".join(page_texts)

    def get_lines(self, page_texts: list[str]) -> list[str]:
        """Flatten pages into trimmed, non-empty lines in reading order."""
        lines: list[str] = []
        for text in page_texts:
            for line in text.splitlines():
                line = line.strip()
                if line:
                    lines.append(line)
        return lines
