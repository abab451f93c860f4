"""Statement import service.

This module sits between callers (API, scripts) and the parsing core:
1. Parse a statement into a preview the user selects from
2. Map the accepted transactions into record-insert payloads

Nothing here writes to storage.
"""

import logging
import time
from typing import Iterable

from statement_import.config import settings
from statement_import.parsers.extractor import DocumentSource
from statement_import.parsers.factory import ParserFactory, get_parser_factory
from statement_import.schemas.internal import ParsedTransaction, ParseResult
from statement_import.schemas.records import RecordInsert, to_start_date

logger = logging.getLogger(__name__)


class StatementImportService:
    """Service for turning statement PDFs into importable records."""

    def __init__(
        self,
        parser_factory: ParserFactory | None = None,
        default_tags: list[str] | None = None,
    ):
        """Initialize the service.

        Args:
            parser_factory: Factory to parse with (default: global factory)
            default_tags: Tags for imported records (default: settings.import_default_tags)
        """
        self.parser_factory = parser_factory or get_parser_factory()
        self.default_tags = (
            list(default_tags) if default_tags is not None else list(settings.import_default_tags)
        )

    def preview(self, source: DocumentSource, password: str | None = None) -> ParseResult:
        """Parse a statement for caller-side selection.

        Raises:
            DocumentUnreadableError: If the PDF cannot be read
            NoTransactionsFoundError: If nothing could be extracted
        """
        start_time = time.time()
        result = self.parser_factory.parse(source, password=password)
        processing_time_ms = int((time.time() - start_time) * 1000)
        logger.info(
            "Statement preview ready",
            extra={
                "bank_format": result.bank_format.value,
                "transactions_count": len(result.transactions),
                "processing_time_ms": processing_time_ms,
            },
        )
        return result

    def build_record_inserts(
        self,
        transactions: Iterable[ParsedTransaction],
        user_id: str,
        tags: list[str] | None = None,
    ) -> list[RecordInsert]:
        """Map accepted transactions to one-off record inserts.

        Args:
            transactions: Transactions the user kept
            user_id: Owner of the new records
            tags: Tags to apply (default: service default tags)

        Returns:
            One RecordInsert per transaction, in input order
        """
        record_tags = list(tags) if tags is not None else self.default_tags
        return [
            RecordInsert(
                user_id=user_id,
                name=txn.description,
                amount=txn.amount,
                currency=txn.currency,
                start_date=to_start_date(txn.transaction_date),
                tags=list(record_tags),
            )
            for txn in transactions
        ]
