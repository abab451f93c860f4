"""Tests for PDF extractor wrapper."""

import io
from unittest.mock import Mock, patch

import pytest

from conftest import HANG_SENG_LINES, build_pdf
from statement_import.core.exceptions import DocumentUnreadableError, PDFExtractionError
from statement_import.parsers.extractor import PDFExtractor, open_document


class TestPDFExtractor:
    """Test suite for PDFExtractor."""

    def test_extract_from_bytes(self, hang_seng_pdf):
        """Test extraction of an in-memory document."""
        extracted = PDFExtractor().extract(hang_seng_pdf)

        assert extracted.page_count == 1
        assert "HANG SENG BANK" in extracted.full_text
        assert "05 MAR 2024 06 MAR 2024 NETFLIX.COM 93.00" in extracted.lines

    def test_extract_from_path(self, tmp_path, hang_seng_pdf):
        """Test extraction from a filesystem path."""
        path = tmp_path / "statement.pdf"
        path.write_bytes(hang_seng_pdf)

        extracted = PDFExtractor().extract(path)

        assert "15 MAR 2024 16 MAR 2024 RYANAIR SAGGART IE 1,234.56" in extracted.lines

    def test_extract_from_file_object(self, hang_seng_pdf):
        """Test caller-owned streams are read but left open."""
        stream = io.BytesIO(hang_seng_pdf)

        extracted = PDFExtractor().extract(stream)

        assert extracted.page_count == 1
        assert not stream.closed

    def test_pages_flattened_in_order(self, amex_pdf):
        """Test lines from every page come back in reading order."""
        extracted = PDFExtractor().extract(amex_pdf)

        assert extracted.page_count == 2
        assert extracted.lines.index("American Express") < extracted.lines.index(
            "March 3 STARBUCKS COFFEE HK 45.50"
        )

    def test_lines_are_trimmed_and_non_empty(self, hang_seng_pdf):
        """Test no blank or padded lines survive."""
        extracted = PDFExtractor().extract(hang_seng_pdf)

        assert extracted.lines
        assert all(line and line == line.strip() for line in extracted.lines)

    def test_empty_bytes(self):
        """Test empty input is unreadable."""
        with pytest.raises(DocumentUnreadableError) as exc_info:
            PDFExtractor().extract(b"")

        assert exc_info.value.error_code == "PARSE_002"

    def test_garbage_bytes(self):
        """Test non-PDF input is unreadable."""
        with pytest.raises(DocumentUnreadableError) as exc_info:
            PDFExtractor().extract(b"this is not a pdf at all")

        assert exc_info.value.error_code == "PARSE_002"

    def test_missing_path(self, tmp_path):
        """Test a path that does not exist is unreadable."""
        with pytest.raises(DocumentUnreadableError) as exc_info:
            PDFExtractor().extract(tmp_path / "missing.pdf")

        assert exc_info.value.error_code == "PARSE_002"
        assert exc_info.value.details["reason"] == "FileNotFoundError"

    def test_unsupported_source(self):
        """Test sources that are neither bytes, paths nor streams are rejected."""
        with pytest.raises(DocumentUnreadableError):
            PDFExtractor().extract(12345)

    def test_extract_encrypted_requires_password(self):
        """Test encrypted PDFs fail fast when no password is provided."""
        pdf_bytes = build_pdf([HANG_SENG_LINES], password="secret")

        with pytest.raises(DocumentUnreadableError) as exc_info:
            PDFExtractor().extract(pdf_bytes)

        assert exc_info.value.error_code == "PARSE_003"

    def test_blank_password_treated_as_missing(self):
        """Test a whitespace password counts as no password."""
        pdf_bytes = build_pdf([HANG_SENG_LINES], password="secret")

        with pytest.raises(DocumentUnreadableError) as exc_info:
            PDFExtractor().extract(pdf_bytes, password="   ")

        assert exc_info.value.error_code == "PARSE_003"

    def test_extract_encrypted_incorrect_password(self):
        """Test encrypted PDFs fail when the password is wrong."""
        pdf_bytes = build_pdf([HANG_SENG_LINES], password="secret")

        with pytest.raises(DocumentUnreadableError) as exc_info:
            PDFExtractor().extract(pdf_bytes, password="wrong")

        assert exc_info.value.error_code == "PARSE_004"

    def test_extract_encrypted_correct_password_decrypts(self):
        """Test encrypted PDFs are decrypted before extraction."""
        pdf_bytes = build_pdf([HANG_SENG_LINES], password="secret")

        extracted = PDFExtractor().extract(pdf_bytes, password="secret")

        assert "05 MAR 2024 06 MAR 2024 NETFLIX.COM 93.00" in extracted.lines

    def test_extract_text_failure(self):
        """Test decoding errors surface as unreadable documents."""
        page = Mock()
        page.extract_text.side_effect = ValueError("bad content stream")
        reader = Mock(is_encrypted=False, pages=[page])

        with patch("statement_import.parsers.extractor.PdfReader", return_value=reader):
            with pytest.raises(DocumentUnreadableError) as exc_info:
                PDFExtractor().extract(b"%PDF-1.4")

        assert exc_info.value.details["reason"] == "ValueError"

    def test_unreadable_is_extraction_error(self):
        """Test the error hierarchy used by callers."""
        assert issubclass(DocumentUnreadableError, PDFExtractionError)

    def test_get_full_text(self):
        """Test page text is joined with newlines."""
        assert PDFExtractor().get_full_text(["page one", "page two"]) == "page one\npage two"

    def test_get_lines(self):
        """Test line flattening drops blank lines and trims."""
        lines = PDFExtractor().get_lines(["  HANG SENG BANK \n\n  ", "05 MAR 2024 SHOP 1.00"])
        assert lines == ["HANG SENG BANK", "05 MAR 2024 SHOP 1.00"]


class TestOpenDocument:
    """Test suite for document stream acquisition."""

    def test_bytes_stream_closed_on_error(self):
        """Test the stream is released even when processing fails."""
        captured = {}

        with pytest.raises(RuntimeError):
            with open_document(b"%PDF-1.4") as stream:
                captured["stream"] = stream
                raise RuntimeError("boom")

        assert captured["stream"].closed

    def test_path_stream_closed_after_use(self, tmp_path):
        """Test files opened from a path are closed on exit."""
        path = tmp_path / "doc.pdf"
        path.write_bytes(b"%PDF-1.4")

        with open_document(str(path)) as stream:
            assert stream.read() == b"%PDF-1.4"

        assert stream.closed
