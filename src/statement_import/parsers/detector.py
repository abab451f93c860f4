"""Bank format detection from statement text.

This module identifies which layout a statement follows based on
text markers found anywhere in the document.
"""

import re

from statement_import.core.banks import BankFormat

MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]


class BankDetector:
    """Detects the statement format from full document text.

    Rules are evaluated in a fixed order and the first match wins:

        1. Hang Seng markers (brand name, Chinese brand name, HKJC partner)
        2. American Express markers
        3. Any full English month name (weak signal for the Amex layout)

    Text that matches none of them is BankFormat.UNKNOWN.

    Example:
        >>> detector = BankDetector()
        >>> detector.detect("HANG SENG BANK Credit Card Statement")
        <BankFormat.HANG_SENG: 'hang_seng'>
    """

    # Explicit brand markers (case-insensitive), in precedence order
    BANK_PATTERNS: list[tuple[BankFormat, list[str]]] = [
        (
            BankFormat.HANG_SENG,
            [
                r"HANG\s+SENG\s+BANK",
                r"恒生銀行",
                r"HKJC",
            ],
        ),
        (
            BankFormat.AMEX,
            [
                r"AMERICAN\s+EXPRESS",
                r"AMEX",
            ],
        ),
    ]

    # Fallback: Amex statements spell out month names on every row
    MONTH_NAME_PATTERN = r"(?:" + "|".join(MONTH_NAMES) + r")"

    def __init__(self):
        """Initialize the detector with compiled regex rules."""
        self._rules: list[tuple[re.Pattern, BankFormat]] = []
        for bank_format, patterns in self.BANK_PATTERNS:
            for pattern in patterns:
                self._rules.append((re.compile(pattern, re.IGNORECASE), bank_format))

        self._month_rule = (re.compile(self.MONTH_NAME_PATTERN, re.IGNORECASE), BankFormat.AMEX)

    def detect(self, text: str | None) -> BankFormat:
        """Detect the statement format.

        Args:
            text: Full text of the statement (all pages)

        Returns:
            The detected BankFormat; never raises
        """
        if not text:
            return BankFormat.UNKNOWN

        for pattern, bank_format in self._rules:
            if pattern.search(text):
                return bank_format

        pattern, bank_format = self._month_rule
        if pattern.search(text):
            return bank_format

        return BankFormat.UNKNOWN

    def get_supported_formats(self) -> list[BankFormat]:
        """Get formats that have explicit markers, in precedence order."""
        formats: list[BankFormat] = []
        for _, bank_format in self._rules:
            if bank_format not in formats:
                formats.append(bank_format)
        return formats

    def add_pattern(self, bank_format: BankFormat, pattern: str) -> None:
        """Add a detection marker for a format.

        New markers are checked after the built-in brand markers and
        before the month-name fallback.

        Args:
            bank_format: Format the marker identifies
            pattern: Regex pattern to match (case-insensitive)
        """
        if bank_format is BankFormat.UNKNOWN:
            raise ValueError("Cannot add a detection pattern for UNKNOWN")

        self._rules.append((re.compile(pattern, re.IGNORECASE), bank_format))
