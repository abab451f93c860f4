"""Tests for bank format detector."""

import pytest

from statement_import.core.banks import BankFormat
from statement_import.parsers.detector import BankDetector


class TestBankDetector:
    """Test suite for BankDetector."""

    def test_detect_hang_seng(self):
        """Test Hang Seng Bank detection by brand name."""
        detector = BankDetector()
        text = """
        HANG SENG BANK
        Credit Card Statement
        """
        assert detector.detect(text) is BankFormat.HANG_SENG

    def test_detect_hang_seng_chinese_brand(self):
        """Test detection by the Chinese brand name."""
        detector = BankDetector()
        assert detector.detect("恒生銀行 信用卡月結單") is BankFormat.HANG_SENG

    def test_detect_hang_seng_loyalty_partner(self):
        """Test the HKJC partner marker identifies Hang Seng statements."""
        detector = BankDetector()
        assert detector.detect("Total HKJC facility spending") is BankFormat.HANG_SENG

    def test_detect_amex(self):
        """Test American Express detection."""
        detector = BankDetector()
        text = """
        American Express
        Statement of Account
        """
        assert detector.detect(text) is BankFormat.AMEX

    def test_detect_amex_short_marker(self):
        """Test the AMEX abbreviation is enough."""
        detector = BankDetector()
        assert detector.detect("Your AMEX card statement") is BankFormat.AMEX

    def test_hang_seng_markers_win_over_amex(self):
        """Test Hang Seng markers take precedence over Amex markers."""
        detector = BankDetector()
        text = "Pay your American Express bill at any Hang Seng Bank branch"
        assert detector.detect(text) is BankFormat.HANG_SENG

    def test_month_name_fallback(self):
        """Test a full month name alone points to the Amex layout."""
        detector = BankDetector()
        text = "Statement\nSeptember 12 SOME SHOP 10.00"
        assert detector.detect(text) is BankFormat.AMEX

    def test_abbreviated_months_do_not_trigger_fallback(self):
        """Test "MAR" style abbreviations are not full month names."""
        detector = BankDetector()
        text = "05 MAR 2024 06 MAR 2024 NETFLIX.COM 93.00"
        assert detector.detect(text) is BankFormat.UNKNOWN

    def test_detect_unknown(self):
        """Test detection returns UNKNOWN for unrecognised text."""
        detector = BankDetector()
        text = """
        Random Bank Corporation
        Card Number: 1234
        """
        assert detector.detect(text) is BankFormat.UNKNOWN

    def test_detect_empty_text(self):
        """Test detection never fails on empty input."""
        detector = BankDetector()
        assert detector.detect("") is BankFormat.UNKNOWN
        assert detector.detect(None) is BankFormat.UNKNOWN

    def test_detect_case_insensitive(self):
        """Test detection is case-insensitive."""
        detector = BankDetector()

        assert detector.detect("HANG SENG BANK") is BankFormat.HANG_SENG
        assert detector.detect("hang seng bank") is BankFormat.HANG_SENG
        assert detector.detect("Hang Seng Bank") is BankFormat.HANG_SENG
        assert detector.detect("american express") is BankFormat.AMEX

    def test_get_supported_formats(self):
        """Test formats with explicit markers are listed in precedence order."""
        detector = BankDetector()
        assert detector.get_supported_formats() == [BankFormat.HANG_SENG, BankFormat.AMEX]

    def test_add_pattern(self):
        """Test adding a new detection marker."""
        detector = BankDetector()
        detector.add_pattern(BankFormat.HANG_SENG, r"hangseng\.com")

        assert detector.detect("Visit www.hangseng.com") is BankFormat.HANG_SENG

    def test_added_pattern_beats_month_fallback(self):
        """Test runtime markers are checked before the month-name fallback."""
        detector = BankDetector()
        detector.add_pattern(BankFormat.HANG_SENG, r"enJoy\s+Card")

        assert detector.detect("enJoy Card statement for January") is BankFormat.HANG_SENG

    def test_add_pattern_unknown_rejected(self):
        """Test markers cannot be registered for UNKNOWN."""
        detector = BankDetector()
        with pytest.raises(ValueError):
            detector.add_pattern(BankFormat.UNKNOWN, r"anything")
