"""PDF parsing module for credit card statements.

This module extracts transactions from statement PDFs using a small
line-oriented architecture:
- LineParser holds the per-line flow shared by all layouts
- Bank-specific refinements override only what's different
- ParserFactory detects the layout and routes to the right parser
"""

from statement_import.parsers.detector import BankDetector
from statement_import.parsers.extractor import PDFExtractor
from statement_import.parsers.factory import ParserFactory, parse_statement
from statement_import.parsers.generic import LineParser

__all__ = [
    "PDFExtractor",
    "BankDetector",
    "LineParser",
    "ParserFactory",
    "parse_statement",
]
