"""Hang Seng Bank parser refinement.

Hang Seng statements print a transaction date and a posting date, both
with an explicit year, ahead of each row:

    05 MAR 2024 06 MAR 2024 NETFLIX.COM 93.00
    12 MAR 2024 12 MAR 2024 REFUND AMAZON 50.00-

A trailing "-" marks a credit, which is skipped.
"""

import re
from datetime import date

from statement_import.core.banks import BankFormat
from statement_import.parsers.generic import LineParser

MONTHS_ABBR: dict[str, int] = {
    "JAN": 1, "FEB": 2, "MAR": 3, "APR": 4, "MAY": 5, "JUN": 6,
    "JUL": 7, "AUG": 8, "SEP": 9, "OCT": 10, "NOV": 11, "DEC": 12,
}

# Trailing location noise, removed in this order
COUNTRY_CODE_SUFFIX = re.compile(r"\s+(HK|IE|AU|MY|US|SG|GB|JP|CN)$")
LOCATION_SUFFIX = re.compile(
    r"\s+(Hong Kong|HongKong|Kuala Lumpur|Saggart).*$", re.IGNORECASE
)
REFERENCE_NUMBER_SUFFIX = re.compile(r"\s+\d{10,}$")


def resolve_hang_seng_date(day: str, month_abbr: str, year: str) -> date | None:
    """Resolve a "05 MAR 2024" style date; None if impossible."""
    month = MONTHS_ABBR.get(month_abbr.upper())
    if month is None:
        return None
    try:
        return date(int(year), month, int(day))
    except ValueError:
        return None


def strip_location_suffixes(description: str) -> str:
    """Drop trailing country codes, city names and reference numbers."""
    description = COUNTRY_CODE_SUFFIX.sub("", description)
    description = LOCATION_SUFFIX.sub("", description)
    description = REFERENCE_NUMBER_SUFFIX.sub("", description)
    return description.strip()


class HangSengParser(LineParser):
    """Parser refinement for Hang Seng Bank credit card statements.

    Hang Seng-specific behaviors:
    - Date anchor: "DD MMM YYYY", usually followed by the posting date
    - Credits carry a trailing "-" on the amount
    - Descriptions end with location and reference-number noise
    - Many more boilerplate lines than Amex statements
    """

    bank_format = BankFormat.HANG_SENG

    NOISE_PHRASES = [
        "opening balance",
        "autopay pymt",
        "card total",
        "fee-overseas",
        "total hkjc",
        "hkjc facility",
        "trans date",
        "post date",
        "new activity",
        "member no",
        "account no",
        "closing date",
        "payment due",
        "minimum payment",
        "credit limit",
        "previous balance",
        "new balance",
        "finance charge",
        "will be deducted",
        "please note",
        "apple pay-others",
        "foreign currency",
        "exchange rate",
    ]

    DATE_PATTERN = re.compile(
        r"^(?P<day>\d{1,2})\s+(?P<month>" + "|".join(MONTHS_ABBR) + r")\s+(?P<year>\d{4})"
    )

    AMOUNT_PATTERN = re.compile(r"(?P<amount>\d+(?:,\d+)*\.\d{2})(?P<credit>-)?$")

    def resolve_date(self, anchor: re.Match, statement_year: int | None) -> date | None:
        return resolve_hang_seng_date(
            anchor.group("day"), anchor.group("month"), anchor.group("year")
        )

    def payload_after_anchor(self, line: str, anchor: re.Match) -> str:
        """Skip the posting date when it immediately follows the transaction date."""
        rest = super().payload_after_anchor(line, anchor)
        post_date = self.DATE_PATTERN.match(rest)
        if post_date is not None:
            rest = rest[post_date.end():].strip()
        return rest

    def is_credit(self, amount_match: re.Match) -> bool:
        return amount_match.group("credit") is not None

    def extract_description(self, text: str) -> str | None:
        description = super().extract_description(text)
        if description is None:
            return None
        description = strip_location_suffixes(description)
        if len(description) < self.MIN_DESCRIPTION_LENGTH:
            return None
        return description
