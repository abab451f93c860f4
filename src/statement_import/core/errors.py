"""Error codes and user-friendly messages.

This module defines the error catalog for statement parsing.
Each error has:
- error_code: Unique identifier
- message: Technical description (for logs)
- user_message: User-friendly explanation
- suggestion: Actionable guidance for the user
- retry_allowed: Whether the error is retryable
"""

# Error catalog for statement parsing
ERROR_CATALOG: dict[str, dict] = {
    "PARSE_002": {
        "code": "PARSE_002",
        "message": "PDF extraction failed: document could not be opened or decoded",
        "user_message": "Unable to read PDF file.",
        "suggestion": "Try downloading the statement again from your bank's website.",
        "retry_allowed": True,
    },
    "PARSE_003": {
        "code": "PARSE_003",
        "message": "PDF is password-protected",
        "user_message": "This statement requires a password.",
        "suggestion": "Please provide the PDF password and try again.",
        "retry_allowed": True,
    },
    "PARSE_004": {
        "code": "PARSE_004",
        "message": "Incorrect password provided for encrypted PDF",
        "user_message": "The password you provided is incorrect.",
        "suggestion": "Check your password and try again.",
        "retry_allowed": True,
    },
    "PARSE_005": {
        "code": "PARSE_005",
        "message": "No transaction lines matched any supported statement layout",
        "user_message": "No transactions found in this statement.",
        "suggestion": "Please upload an American Express or Hang Seng Bank credit card statement.",
        "retry_allowed": False,
    },
    "VAL_001": {
        "code": "VAL_001",
        "message": "Request data failed validation",
        "user_message": "Invalid input data.",
        "suggestion": "Please check your input and try again.",
        "retry_allowed": False,
    },
    # API-specific errors
    "API_001": {
        "code": "API_001",
        "message": "Invalid file type uploaded",
        "user_message": "Only PDF files are supported.",
        "suggestion": "Please upload a PDF file. Most banks provide statements in PDF format.",
        "retry_allowed": False,
    },
    "API_002": {
        "code": "API_002",
        "message": "File size exceeds maximum limit",
        "user_message": "The file is too large.",
        "suggestion": "Please upload a smaller statement file.",
        "retry_allowed": False,
    },
    "API_005": {
        "code": "API_005",
        "message": "Invalid PDF magic bytes",
        "user_message": "This file appears to be corrupt or is not a valid PDF.",
        "suggestion": "Please ensure you're uploading an actual PDF file, not a renamed file.",
        "retry_allowed": False,
    },
}


def get_error(error_code: str) -> dict:
    """Get error definition by code.

    Args:
        error_code: Error code from the catalog

    Returns:
        Dict with error details (a generic entry for unknown codes)
    """
    if error_code not in ERROR_CATALOG:
        return {
            "code": "UNKNOWN",
            "message": f"Unknown error code: {error_code}",
            "user_message": "An unexpected error occurred.",
            "suggestion": "Please try again. Contact support if the problem persists.",
            "retry_allowed": True,
        }
    return ERROR_CATALOG[error_code]


def get_user_message(error_code: str) -> str:
    """Get user-friendly message for an error code."""
    return get_error(error_code)["user_message"]


def get_suggestion(error_code: str) -> str:
    """Get actionable suggestion for an error code."""
    return get_error(error_code)["suggestion"]


def is_retryable(error_code: str) -> bool:
    """Check if an error is retryable."""
    return get_error(error_code)["retry_allowed"]
