"""Statement endpoints: parse preview and record-insert mapping."""

from typing import Annotated

from fastapi import APIRouter, Header, Request, status
from starlette.concurrency import run_in_threadpool

from statement_import.config import settings
from statement_import.core.exceptions import ValidationError
from statement_import.schemas.records import RecordInsert
from statement_import.schemas.statement import RecordImportRequest, StatementParseResponse
from statement_import.services.statement import StatementImportService

router = APIRouter(prefix="/statements", tags=["statements"])

# Constants
PDF_MAGIC_BYTES = b"%PDF-"


@router.post(
    "/parse",
    response_model=StatementParseResponse,
    status_code=status.HTTP_200_OK,
    summary="Parse a credit card statement",
    description="""
    Extract transactions from a statement PDF for review. Nothing is stored.

    ## Supported Layouts
    - American Express (month-name rows, year from the header)
    - Hang Seng Bank (transaction + posting date rows)
    - Undetected statements are tried against both layouts

    ## File Requirements
    - Request body must be raw PDF bytes (`Content-Type: application/pdf`)
    - Maximum size: configurable via `PDF_MAX_SIZE_MB` (default: 25MB)
    - Supports password-protected PDFs (optional `X-PDF-Password` header)

    ## Error Codes
    - PARSE_002: PDF could not be read
    - PARSE_003: PDF requires password - retry with password
    - PARSE_004: Incorrect password - verify and retry
    - PARSE_005: No transactions found
    - API_001: Invalid file type
    - API_002: File too large
    - API_005: Invalid PDF file
    """,
)
async def parse_statement_upload(
    request: Request,
    password: Annotated[
        str | None,
        Header(
            alias="X-PDF-Password",
            description="Optional password for encrypted PDFs.",
        ),
    ] = None,
) -> StatementParseResponse:
    """Parse an uploaded statement and return its transactions."""
    # Validate content type (raw body upload, no multipart).
    content_type = (request.headers.get("content-type") or "").split(";")[0].strip()
    if content_type.lower() != "application/pdf":
        raise ValidationError("API_001", http_status=status.HTTP_400_BAD_REQUEST)

    # Read request body in-memory with a strict size cap (no disk spooling).
    max_bytes = settings.pdf_max_size_mb * 1024 * 1024
    buf = bytearray()
    async for chunk in request.stream():
        if not chunk:
            continue
        if len(buf) + len(chunk) > max_bytes:
            raise ValidationError(
                "API_002", http_status=status.HTTP_400_BAD_REQUEST
            )
        buf.extend(chunk)
    pdf_bytes = bytes(buf)

    # Validate PDF magic bytes
    if not pdf_bytes.startswith(PDF_MAGIC_BYTES):
        raise ValidationError("API_005", http_status=status.HTTP_400_BAD_REQUEST)

    service = StatementImportService()
    result = await run_in_threadpool(service.preview, pdf_bytes, password)
    return StatementParseResponse.from_result(result)


@router.post(
    "/records",
    response_model=list[RecordInsert],
    summary="Build record inserts from selected transactions",
)
async def build_records(payload: RecordImportRequest) -> list[RecordInsert]:
    """Map the transactions a user accepted into record-insert payloads."""
    service = StatementImportService()
    return service.build_record_inserts(
        payload.transactions, user_id=payload.user_id, tags=payload.tags
    )
