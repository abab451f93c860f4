import io
import sys
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from pypdf import PdfReader, PdfWriter
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

sys.path.append(str(Path(__file__).parents[1] / "src"))

from statement_import.main import app


AMEX_LINES = [
    "American Express",
    "Statement of Account",
    "Statement Date March 10, 2024",
    "Transaction Details",
    "PAYMENT RECEIVED - THANK YOU 5,000.00",
    "October 28 AMAZON MARKETPLACE 1,250.00",
    "March 3 STARBUCKS COFFEE HK 45.50",
    "March 4 GOOGLE*YOUTUBEPREMIUM 650253000 HK 78.00",
    "March 5 Payment - Online Banking 300.00",
    "Total new charges 1,373.50",
]

HANG_SENG_LINES = [
    "HANG SENG BANK",
    "Credit Card Statement",
    "TRANS DATE POST DATE DESCRIPTION AMOUNT",
    "01 MAR 2024 PREVIOUS BALANCE 2,000.00",
    "05 MAR 2024 06 MAR 2024 NETFLIX.COM 93.00",
    "07 MAR 2024 08 MAR 2024 KFC SHATIN HONG KONG HK 56.70",
    "09 MAR 2024 10 MAR 2024 AMAZON REFUND 50.00-",
    "12 MAR 2024 12 MAR 2024 AUTOPAY PYMT THANK YOU 1,500.00",
    "15 MAR 2024 16 MAR 2024 RYANAIR SAGGART IE 1,234.56",
]


def build_pdf(pages: list[list[str]], password: str | None = None) -> bytes:
    """Render lines of text onto PDF pages (one drawString per line)."""
    buf = io.BytesIO()
    pdf = canvas.Canvas(buf, pagesize=A4)
    for lines in pages:
        y = 800
        for line in lines:
            pdf.drawString(40, y, line)
            y -= 18
        pdf.showPage()
    pdf.save()
    data = buf.getvalue()

    if password is None:
        return data

    writer = PdfWriter()
    for page in PdfReader(io.BytesIO(data)).pages:
        writer.add_page(page)
    writer.encrypt(password)
    out = io.BytesIO()
    writer.write(out)
    return out.getvalue()


@pytest.fixture
def amex_lines() -> list[str]:
    return list(AMEX_LINES)


@pytest.fixture
def hang_seng_lines() -> list[str]:
    return list(HANG_SENG_LINES)


@pytest.fixture
def amex_pdf() -> bytes:
    return build_pdf([AMEX_LINES[:4], AMEX_LINES[4:]])


@pytest.fixture
def hang_seng_pdf() -> bytes:
    return build_pdf([HANG_SENG_LINES])


@pytest.fixture
async def client():
    """Provide an HTTP client bound to the app."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
