"""Internal data schemas for parsed statement data.

These models are the output of the parsing pipeline. They are frozen:
once a line parser creates a transaction nothing downstream changes it.
"""

import uuid
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from pydantic import BaseModel, ConfigDict, Field, field_validator

from statement_import.core.banks import BankFormat, get_bank_name

CENT = Decimal("0.01")


class ExtractedText(BaseModel):
    """Text pulled out of a statement document.

    `full_text` is every page joined with newlines; `lines` is the
    flattened, trimmed, non-empty line sequence in reading order.
    """

    model_config = ConfigDict(frozen=True)

    full_text: str = Field(..., description="All page text joined with newlines")
    lines: list[str] = Field(default_factory=list, description="Trimmed non-empty lines")
    page_count: int = Field(default=0, description="Number of pages read")


class ParsedTransaction(BaseModel):
    """Represents a single debit extracted from a statement line.

    Credits and refunds are never represented; amount is always positive.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        description="Opaque identifier, unique per parse run",
    )
    transaction_date: date = Field(..., description="Transaction date")
    description: str = Field(..., description="Cleaned merchant label")
    amount: Decimal = Field(..., gt=0, description="Positive amount, two decimals")
    currency: str = Field(..., description="ISO currency code")
    raw_text: str = Field(..., description="Source line, kept for audit")

    @field_validator("amount")
    @classmethod
    def two_decimal_places(cls, v: Decimal) -> Decimal:
        """Store amounts with exactly two fraction digits."""
        try:
            return v.quantize(CENT, rounding=ROUND_HALF_UP)
        except InvalidOperation as e:
            raise ValueError("Amount has too many digits") from e

    @field_validator("description")
    @classmethod
    def description_not_empty(cls, v: str) -> str:
        """Ensure merchant label is not empty."""
        if not v or not v.strip():
            raise ValueError("Description cannot be empty")
        return v.strip()


class ParseResult(BaseModel):
    """Successful outcome of parsing one statement.

    `bank_name` is None when the format could not be detected, even
    though one of the line parsers still produced the transactions.
    """

    model_config = ConfigDict(frozen=True)

    transactions: list[ParsedTransaction] = Field(..., min_length=1)
    bank_format: BankFormat = Field(default=BankFormat.UNKNOWN)
    bank_name: str | None = Field(None, description="Display name of the detected bank")

    @classmethod
    def for_format(
        cls, bank_format: BankFormat, transactions: list[ParsedTransaction]
    ) -> "ParseResult":
        """Create a result labelled with the display name of `bank_format`."""
        return cls(
            transactions=transactions,
            bank_format=bank_format,
            bank_name=get_bank_name(bank_format),
        )
