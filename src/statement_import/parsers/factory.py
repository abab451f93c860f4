"""Parser factory for routing statements to the right line parser.

This module orchestrates the parsing workflow:
1. Extract page text and lines using PDFExtractor
2. Detect the statement format using BankDetector
3. Run the matching line parser (or race both when the format is unknown)
4. Fail when nothing was extracted, otherwise return a ParseResult
"""

import logging

from statement_import.core.banks import BankFormat
from statement_import.core.exceptions import NoTransactionsFoundError
from statement_import.parsers.detector import BankDetector
from statement_import.parsers.extractor import DocumentSource, PDFExtractor
from statement_import.parsers.generic import LineParser
from statement_import.parsers.refinements import AmexParser, HangSengParser
from statement_import.schemas.internal import ParsedTransaction, ParseResult

logger = logging.getLogger(__name__)


class ParserFactory:
    """Factory for parsing credit card statements.

    The factory handles the complete parsing workflow:
    - Extracts text and lines from the PDF
    - Detects which layout the statement follows
    - Routes to the matching line parser
    - Returns a non-empty ParseResult or raises

    The factory keeps no per-parse state; one instance can serve
    concurrent callers.

    Example:
        >>> factory = ParserFactory()
        >>> result = factory.parse("statement.pdf")
        >>> print(f"Bank: {result.bank_name}")
        >>> print(f"Transactions: {len(result.transactions)}")
    """

    def __init__(
        self,
        extractor: PDFExtractor | None = None,
        detector: BankDetector | None = None,
        currency: str | None = None,
    ):
        """Initialize the parser factory.

        Args:
            extractor: PDF extractor instance (default: new PDFExtractor)
            detector: Bank detector instance (default: new BankDetector)
            currency: Currency for parsed transactions (default: settings.home_currency)
        """
        self.extractor = extractor or PDFExtractor()
        self.detector = detector or BankDetector()
        self.currency = currency

        # Registry of line parsers per detected format
        self._parsers: dict[BankFormat, type[LineParser]] = {
            BankFormat.AMEX: AmexParser,
            BankFormat.HANG_SENG: HangSengParser,
        }

    def parse(self, source: DocumentSource, password: str | None = None) -> ParseResult:
        """Parse a statement document.

        Args:
            source: PDF bytes, a filesystem path, or a binary file object
            password: Optional password for encrypted PDFs

        Returns:
            ParseResult with at least one transaction

        Raises:
            DocumentUnreadableError: If the document cannot be opened or decoded
            NoTransactionsFoundError: If no line yields a transaction
        """
        extracted = self.extractor.extract(source, password=password)
        logger.info(
            "Extracted statement text",
            extra={"page_count": extracted.page_count, "line_count": len(extracted.lines)},
        )
        return self.parse_lines(extracted.full_text, extracted.lines)

    def parse_lines(self, full_text: str, lines: list[str]) -> ParseResult:
        """Parse already-extracted statement text.

        Args:
            full_text: All page text joined with newlines
            lines: Trimmed, non-empty lines in reading order

        Returns:
            ParseResult with at least one transaction

        Raises:
            NoTransactionsFoundError: If no line yields a transaction
        """
        bank_format = self.detector.detect(full_text)
        logger.info("Detected statement format", extra={"bank_format": bank_format.value})

        if bank_format is BankFormat.UNKNOWN:
            transactions = self._race_unknown(full_text, lines)
        else:
            transactions = self._run_parser(bank_format, full_text, lines)

        if not transactions:
            logger.warning(
                "No transactions found",
                extra={"bank_format": bank_format.value, "line_count": len(lines)},
            )
            raise NoTransactionsFoundError(
                details={"bank_format": bank_format.value, "line_count": len(lines)}
            )

        logger.info(
            "Parsed statement",
            extra={"bank_format": bank_format.value, "transactions_count": len(transactions)},
        )
        return ParseResult.for_format(bank_format, transactions)

    def get_parser(self, bank_format: BankFormat) -> LineParser:
        """Create the line parser registered for a format.

        Raises:
            ValueError: If no parser is registered for the format
        """
        parser_class = self._parsers.get(bank_format)
        if parser_class is None:
            raise ValueError(f"No line parser registered for {bank_format.value}")
        return parser_class(currency=self.currency)

    def _run_parser(
        self, bank_format: BankFormat, full_text: str, lines: list[str]
    ) -> list[ParsedTransaction]:
        parser = self.get_parser(bank_format)
        logger.debug("Using parser %s", type(parser).__name__)
        return parser.parse_lines(lines, full_text)

    def _race_unknown(self, full_text: str, lines: list[str]) -> list[ParsedTransaction]:
        """Run every parser on an undetected statement and keep the largest result.

        Ties go to the Amex parser, which runs first. The tie-break is an
        arbitrary default kept for compatibility.
        """
        amex = self._run_parser(BankFormat.AMEX, full_text, lines)
        hang_seng = self._run_parser(BankFormat.HANG_SENG, full_text, lines)
        logger.debug(
            "Unknown format race: amex=%d hang_seng=%d", len(amex), len(hang_seng)
        )
        return amex if len(amex) >= len(hang_seng) else hang_seng


# Singleton factory instance for global use
_factory_instance: ParserFactory | None = None


def get_parser_factory() -> ParserFactory:
    """Get or create the global ParserFactory instance.

    Returns:
        Global ParserFactory singleton
    """
    global _factory_instance
    if _factory_instance is None:
        _factory_instance = ParserFactory()
    return _factory_instance


def parse_statement(source: DocumentSource, password: str | None = None) -> ParseResult:
    """Convenience function to parse a statement using the global factory.

    Args:
        source: PDF bytes, a filesystem path, or a binary file object
        password: Optional password for encrypted PDFs

    Returns:
        ParseResult with extracted transactions
    """
    factory = get_parser_factory()
    return factory.parse(source, password=password)
