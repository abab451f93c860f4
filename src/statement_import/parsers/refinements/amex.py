"""American Express parser refinement.

Amex statements list transactions one per line without a year:

    March 3 STARBUCKS COFFEE HK 45.50

The year comes from the statement header. Statements are issued early in
the new year, so rows dated October to December belong to the year before.
"""

import re
from datetime import date

from statement_import.config import settings
from statement_import.core.banks import BankFormat
from statement_import.parsers.detector import MONTH_NAMES
from statement_import.parsers.generic import LineParser
from statement_import.parsers.statement_year import resolve_statement_year

MONTHS_FULL: dict[str, int] = {name.lower(): number for number, name in enumerate(MONTH_NAMES, start=1)}

# Rows in these months are dated to the previous year
FISCAL_ROLLBACK_MONTH = 10


def resolve_amex_date(month_name: str, day: str, statement_year: int) -> date | None:
    """Resolve a "March 3" style date against the statement year.

    Returns None for unknown month names and impossible dates.
    """
    month = MONTHS_FULL.get(month_name.strip().lower())
    if month is None or not day.isdigit():
        return None

    year = statement_year - 1 if month >= FISCAL_ROLLBACK_MONTH else statement_year
    try:
        return date(year, month, int(day))
    except ValueError:
        return None


class AmexParser(LineParser):
    """Parser refinement for American Express statements.

    Amex-specific behaviors:
    - Date anchor: full month name and day ("October 9 ")
    - Year: inferred from the header, rolled back a year for Oct-Dec rows
    - Account-level postings ("PAYMENT ...", "CREDIT ...") are skipped
    """

    bank_format = BankFormat.AMEX

    NOISE_PHRASES = [
        "payment received",
        "direct debit",
        "autopay",
        "總額",
        "賬項",
        "會員",
        "截數",
        "月結單",
    ]

    DATE_PATTERN = re.compile(
        r"^(?P<month>" + "|".join(MONTH_NAMES) + r")\s+(?P<day>\d{1,2})\s+"
    )

    ACCOUNT_POSTING_PREFIXES = ("payment", "credit")

    def statement_year(self, lines: list[str], full_text: str) -> int | None:
        return resolve_statement_year(lines, scan_lines=settings.statement_year_scan_lines)

    def resolve_date(self, anchor: re.Match, statement_year: int | None) -> date | None:
        if statement_year is None:
            statement_year = resolve_statement_year([])
        return resolve_amex_date(anchor.group("month"), anchor.group("day"), statement_year)

    def extract_description(self, text: str) -> str | None:
        description = super().extract_description(text)
        if description is None:
            return None
        if description.lower().startswith(self.ACCOUNT_POSTING_PREFIXES):
            return None
        return description
