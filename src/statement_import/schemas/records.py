"""Record-insert payloads built from accepted transactions.

Persisting these is the caller's job; this package only shapes them.
"""

from datetime import date
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field

ONE_OFF = "one-off"


def to_start_date(transaction_date: date) -> str:
    """Midnight UTC timestamp for a calendar date ("2024-03-05T00:00:00.000Z")."""
    return f"{transaction_date.isoformat()}T00:00:00.000Z"


class RecordInsert(BaseModel):
    """Generic "insert record" request for one imported transaction."""

    user_id: str = Field(..., description="Owner of the new record")
    name: str = Field(..., description="Record name (cleaned merchant label)")
    amount: Decimal = Field(..., gt=0, description="Transaction amount")
    currency: str = Field(..., description="ISO currency code")
    start_date: str = Field(..., description="ISO-8601 timestamp of the transaction date")
    frequency: Literal["daily", "weekly", "monthly", "yearly", "one-off"] = ONE_OFF
    cancelled: bool = False
    cancelled_date: str | None = None
    notes: str | None = None
    tags: list[str] = Field(default_factory=list, description="Classification tags")
