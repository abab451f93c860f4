"""API request/response schemas for statement parsing endpoints."""

from pydantic import BaseModel, Field

from statement_import.core.banks import BankFormat
from statement_import.schemas.internal import ParsedTransaction, ParseResult


class StatementParseResponse(BaseModel):
    """Parse preview returned to the caller for transaction selection."""

    bank_name: str | None = Field(None, description="Detected bank, null when undetected")
    bank_format: BankFormat = Field(..., description="Detected statement layout")
    transactions_count: int = Field(..., description="Number of transactions found")
    transactions: list[ParsedTransaction] = Field(..., description="Parsed transactions")

    @classmethod
    def from_result(cls, result: ParseResult) -> "StatementParseResponse":
        return cls(
            bank_name=result.bank_name,
            bank_format=result.bank_format,
            transactions_count=len(result.transactions),
            transactions=result.transactions,
        )


class RecordImportRequest(BaseModel):
    """Transactions the user accepted, to be turned into record inserts."""

    user_id: str = Field(..., min_length=1, description="Owner of the new records")
    transactions: list[ParsedTransaction] = Field(..., min_length=1)
    tags: list[str] | None = Field(None, description="Tags to apply (default from settings)")
