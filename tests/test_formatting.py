"""
Display helper tests
"""

from datetime import date, datetime

import pytest
from utils.formatting import (
    document_filename, format_currency, format_date_for_api,
    format_display_date, format_round_off, sanitize_filename
)


class TestAmounts:

    @pytest.mark.parametrize("amount, expected", [
        (307, "₹307.00"),
        (1234.5, "₹1,234.50"),
        (46.8, "₹46.80"),
        (1000000, "₹1,000,000.00"),
        (0, "₹0.00"),
    ])
    def test_currency(self, amount, expected):
        assert format_currency(amount) == expected

    def test_round_off_sign(self):
        assert format_round_off(0.2) == "+₹0.20"
        assert format_round_off(0.0) == "+₹0.00"
        assert format_round_off(-0.5) == "₹-0.50"


class TestDates:

    def test_api_date_from_iso_string(self):
        assert format_date_for_api("2024-09-15") == "15-09-2024"

    def test_api_date_from_date_objects(self):
        assert format_date_for_api(date(2024, 1, 5)) == "05-01-2024"
        assert format_date_for_api(datetime(2024, 1, 5, 13, 30)) == "05-01-2024"

    def test_empty_date(self):
        assert format_date_for_api("") == ""
        assert format_display_date("") == ""

    def test_display_date(self):
        assert format_display_date("2024-09-15") == "15/09/2024"
        assert format_display_date("15-09-2024") == "15/09/2024"

    def test_invalid_iso_date_raises(self):
        with pytest.raises(ValueError):
            format_date_for_api("15/09/2024")


class TestFilenames:

    def test_unsafe_characters_removed(self):
        assert sanitize_filename('A/B: "Traders"?') == "AB Traders"

    def test_document_filename(self):
        assert document_filename("Pearl Auto Springs", "101") == "Pearl Auto Springs 101.pdf"
        assert document_filename("M/s Sai", "7|8", extension="json") == "Ms Sai 78.json"
