"""Request logging middleware and JSON log formatting.

Statement text, card numbers and holder details must never reach the
logs, so every message and path passes through `filter_pii` first.
"""

import json
import logging
import re
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


PII_PATTERNS = [
    # Card numbers: 13-19 digits, optionally grouped by spaces or dashes
    (re.compile(r"\b\d{4}[\s-]?\d{4}[\s-]?\d{4}[\s-]?\d{3,7}\b"), "[CARD]"),
    # Amex account numbers printed as 4-6-5
    (re.compile(r"\b\d{4}[\s-]\d{6}[\s-]\d{5}\b"), "[CARD]"),
    (re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"), "[EMAIL]"),
    # HKID, e.g. A123456(7)
    (re.compile(r"\b[A-Z]{1,2}\d{6}\s?\(?[0-9A]\)?"), "[HKID]"),
    (re.compile(r"\+\d{1,3}[-.\s]?\(?\d{2,4}\)?[-.\s]?\d{3,4}[-.\s]?\d{4,5}"), "[PHONE]"),
]

# Record attributes copied into JSON log lines when present
EXTRA_FIELDS = (
    "request_id",
    "method",
    "path",
    "status_code",
    "duration_ms",
    "error_code",
    "error_type",
    "client_ip",
    "bank_format",
    "page_count",
    "line_count",
    "transactions_count",
    "processing_time_ms",
)


def filter_pii(text: str) -> str:
    """Replace card numbers, emails, HKIDs and phone numbers with placeholders."""
    if not text:
        return text

    for pattern, replacement in PII_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log start and end of every request under a generated request ID.

    The ID is stored on `request.state` and echoed as `X-Request-ID`.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        context = {
            "request_id": request_id,
            "method": request.method,
            "path": filter_pii(request.url.path),
        }
        start_time = time.time()

        logger.info(
            "Request started",
            extra={**context, "client_ip": request.client.host if request.client else None},
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "Request failed",
                extra={
                    **context,
                    "duration_ms": _elapsed_ms(start_time),
                    "error_type": type(exc).__name__,
                },
            )
            raise

        response.headers["X-Request-ID"] = request_id
        logger.info(
            "Request completed",
            extra={
                **context,
                "status_code": response.status_code,
                "duration_ms": _elapsed_ms(start_time),
            },
        )
        return response


def _elapsed_ms(start_time: float) -> int:
    return int((time.time() - start_time) * 1000)


class JSONLogFormatter(logging.Formatter):
    """One JSON object per record, limited to EXTRA_FIELDS and PII-filtered."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": filter_pii(record.getMessage()),
        }

        for field in EXTRA_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_data[field] = value

        if record.exc_info:
            log_data["exception"] = filter_pii(self.formatException(record.exc_info))

        return json.dumps(log_data)
