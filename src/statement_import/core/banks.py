"""Supported statement formats and their display metadata."""

from __future__ import annotations

from enum import Enum
from typing import Final


class BankFormat(str, Enum):
    """Layout convention a statement follows.

    AMEX statements list one transaction per line as "March 3 MERCHANT 45.50"
    with no year on the row. HANG_SENG statements prefix each row with a
    transaction date and a posting date, both carrying an explicit year.
    """

    AMEX = "amex"
    HANG_SENG = "hang_seng"
    UNKNOWN = "unknown"


BANK_DISPLAY_NAMES: Final[dict[BankFormat, str]] = {
    BankFormat.AMEX: "American Express",
    BankFormat.HANG_SENG: "Hang Seng Bank",
}


def get_bank_name(bank_format: BankFormat | None) -> str | None:
    if bank_format is None:
        return None
    return BANK_DISPLAY_NAMES.get(bank_format)
