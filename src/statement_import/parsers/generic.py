"""Generic statement line parser.

This module provides the LineParser class which holds the line-by-line
extraction flow shared by every statement layout. Bank-specific
refinements inherit from it and override only what's different
(noise phrases, date anchor, amount shape, description cleanup).
"""

import re
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Iterable

from statement_import.config import settings
from statement_import.core.banks import BankFormat
from statement_import.parsers.normalizer import clean_description, collapse_whitespace
from statement_import.schemas.internal import CENT, ParsedTransaction


class LineParser:
    """Base parser turning statement lines into transactions.

    Each line goes through the same checks, each one a separate method so
    refinements can override and tests can exercise them individually:

        1. is_noise()            - boilerplate phrase -> skip
        2. match_date_anchor()   - line must start with a date
        3. resolve_date()        - anchor -> calendar date
        4. payload_after_anchor() - text after the date(s)
        5. match_amount()        - amount at the end of the payload
        6. is_credit()           - credits/refunds are skipped
        7. extract_description() - text before the amount
        8. clean_description()   - shared normalizer

    A line failing any check contributes nothing; it is never an error.

    Example:
        >>> parser = HangSengParser()
        >>> txns = parser.parse_lines(lines)
    """

    bank_format: BankFormat = BankFormat.UNKNOWN

    # Lowercase substrings marking non-transaction lines
    NOISE_PHRASES: list[str] = []

    # Must be overridden: anchored date pattern
    DATE_PATTERN: re.Pattern | None = None

    AMOUNT_PATTERN = re.compile(r"(?P<amount>\d+(?:,\d+)*\.\d{2})$")

    MIN_DESCRIPTION_LENGTH = 2

    def __init__(self, currency: str | None = None):
        """Initialize the parser.

        Args:
            currency: Currency stamped on every transaction
                (default: settings.home_currency)
        """
        self.currency = currency or settings.home_currency

    def parse_lines(
        self, lines: Iterable[str], full_text: str = ""
    ) -> list[ParsedTransaction]:
        """Extract transactions from statement lines.

        Args:
            lines: Trimmed, non-empty lines in document order
            full_text: Full document text (used by layouts that need context)

        Returns:
            Transactions in line order (possibly empty)
        """
        lines = list(lines)
        statement_year = self.statement_year(lines, full_text)

        transactions: list[ParsedTransaction] = []
        for line in lines:
            transaction = self.parse_line(line, statement_year)
            if transaction is not None:
                transactions.append(transaction)
        return transactions

    def statement_year(self, lines: list[str], full_text: str) -> int | None:
        """Reference year for rows without one. None when rows carry a year."""
        return None

    def parse_line(
        self, line: str, statement_year: int | None = None
    ) -> ParsedTransaction | None:
        """Parse a single line, or return None if it is not a transaction."""
        if self.is_noise(line):
            return None

        anchor = self.match_date_anchor(line)
        if anchor is None:
            return None

        transaction_date = self.resolve_date(anchor, statement_year)
        if transaction_date is None:
            return None

        payload = self.payload_after_anchor(line, anchor)

        amount_match = self.match_amount(payload)
        if amount_match is None or self.is_credit(amount_match):
            return None

        amount = self.parse_amount(amount_match.group("amount"))
        if amount is None or amount <= 0:
            return None

        description = self.extract_description(payload[: amount_match.start()])
        if description is None:
            return None

        return ParsedTransaction(
            transaction_date=transaction_date,
            description=clean_description(description),
            amount=amount,
            currency=self.currency,
            raw_text=line,
        )

    def is_noise(self, line: str) -> bool:
        """Check whether the line contains a boilerplate phrase."""
        lower = line.lower()
        return any(phrase in lower for phrase in self.NOISE_PHRASES)

    def match_date_anchor(self, line: str) -> re.Match | None:
        """Match the date the line must start with."""
        if self.DATE_PATTERN is None:
            raise NotImplementedError(f"{type(self).__name__} must define DATE_PATTERN")
        return self.DATE_PATTERN.match(line)

    def resolve_date(self, anchor: re.Match, statement_year: int | None) -> date | None:
        """Turn a date anchor into a calendar date. Override in refinements."""
        raise NotImplementedError(f"{type(self).__name__} must implement resolve_date")

    def payload_after_anchor(self, line: str, anchor: re.Match) -> str:
        """Text following the date anchor, trimmed."""
        return line[anchor.end():].strip()

    def match_amount(self, payload: str) -> re.Match | None:
        """Find the amount at the end of the payload."""
        return self.AMOUNT_PATTERN.search(payload)

    def is_credit(self, amount_match: re.Match) -> bool:
        """Check whether the amount is marked as a credit/refund."""
        return False

    def parse_amount(self, text: str) -> Decimal | None:
        """Parse "1,234.56" into Decimal("1234.56").

        Returns None if the text is not a number or has more digits than
        a cent amount can hold.
        """
        try:
            return Decimal(text.replace(",", "")).quantize(CENT)
        except InvalidOperation:
            return None

    def extract_description(self, text: str) -> str | None:
        """Collapse the raw description; None if it is too short to keep."""
        description = collapse_whitespace(text)
        if len(description) < self.MIN_DESCRIPTION_LENGTH:
            return None
        return description
