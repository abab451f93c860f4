"""Custom exception classes for statement parsing.

This module defines a hierarchy of exceptions used throughout the
parsing pipeline. Each exception maps to a specific error code
defined in errors.py.
"""

from typing import Any


class StatementProcessingError(Exception):
    """Base exception for all statement processing errors.

    All custom exceptions inherit from this base class and include
    an error_code that maps to the error catalog.

    Attributes:
        error_code: Code from the error catalog (e.g., "PARSE_002")
        details: Additional context about the error (for logging)
        http_status: HTTP status code to return (default: 500)
    """

    def __init__(
        self,
        error_code: str,
        details: dict[str, Any] | None = None,
        http_status: int = 500,
    ):
        """Initialize the exception.

        Args:
            error_code: Error code from errors.py
            details: Additional error context (not shown to users)
            http_status: HTTP status code (default: 500)
        """
        self.error_code = error_code
        self.details = details or {}
        self.http_status = http_status
        super().__init__(error_code)


class PDFExtractionError(StatementProcessingError):
    """Raised when PDF text extraction fails."""

    pass


class DocumentUnreadableError(PDFExtractionError):
    """Raised when the document cannot be opened or decoded.

    Codes:
    - PARSE_002: corrupted, empty or non-PDF input
    - PARSE_003: encrypted PDF and no password supplied
    - PARSE_004: encrypted PDF and the password is wrong
    """

    def __init__(
        self,
        error_code: str = "PARSE_002",
        details: dict[str, Any] | None = None,
        http_status: int = 400,
    ):
        super().__init__(error_code, details, http_status)


class ParsingError(StatementProcessingError):
    """Raised when statement parsing fails."""

    pass


class NoTransactionsFoundError(ParsingError):
    """Raised when a readable document yields zero transactions.

    An empty list is never a successful parse result. Maps to PARSE_005.
    """

    def __init__(
        self,
        error_code: str = "PARSE_005",
        details: dict[str, Any] | None = None,
        http_status: int = 422,
    ):
        super().__init__(error_code, details, http_status)


class ValidationError(StatementProcessingError):
    """Raised when request data fails validation."""

    pass
