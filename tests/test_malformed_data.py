"""
Malformed Data Tests
Tests the request validation layer with missing, mistyped and out-of-range data
"""

import copy

import pytest
from utils.validators import (
    InvoiceValidator, validate_invoice, parse_number, parse_number_or_zero
)


VALID_REQUEST = {
    "buyer_name": "Pearl Auto Springs",
    "buyer_address": "Shop No- 36, Truck Terminal, Kalamboli",
    "bill_no": "101",
    "challan_no": "55",
    "date": "15-09-2024",
    "vehicle_no": "",
    "place_of_delivery": "Kalamboli",
    "loading_charge": 0,
    "products": [
        {"description": "Leaf Spring", "hsn": "7320", "quantity": 2, "rate": 100, "per": "Nos"}
    ]
}


class TestMalformedDataHandling:
    """Tests that malformed requests are reported field by field"""

    def setup_method(self):
        """Setup validator for each test"""
        self.validator = InvoiceValidator()
        self.request = copy.deepcopy(VALID_REQUEST)

    def test_valid_request_passes(self):
        result = self.validator.validate(self.request)

        assert result.is_valid == True
        assert result.errors == []

    def test_completely_empty_request(self):
        """Test empty dictionary"""
        result = self.validator.validate({})

        assert result.is_valid == False
        assert "Buyer name is required and must be at least 2 characters long" in result.errors
        assert "Bill number is required" in result.errors
        assert "Date is required" in result.errors
        assert "Vehicle number field is required (can be empty)" in result.errors
        assert "Loading charge is required (can be 0)" in result.errors
        assert "At least one product is required" in result.errors

    def test_not_a_dictionary(self):
        result = self.validator.validate(["not", "a", "dict"])

        assert result.errors == ["Invoice data must be a dictionary"]

    def test_short_buyer_fields(self):
        self.request["buyer_name"] = " A "
        self.request["buyer_address"] = "Panvel"

        result = self.validator.validate(self.request)

        assert len(result.errors) == 2
        assert any("Buyer address" in err for err in result.errors)

    def test_iso_date_rejected(self):
        self.request["date"] = "2024-09-15"

        result = self.validator.validate(self.request)

        assert result.errors == ["Date must be in DD-MM-YYYY format"]

    def test_missing_vehicle_number(self):
        del self.request["vehicle_no"]

        result = self.validator.validate(self.request)

        assert result.errors == ["Vehicle number field is required (can be empty)"]

    @pytest.mark.parametrize("loading_charge", [-1, "10", True, float('nan'), float('inf')])
    def test_invalid_loading_charge(self, loading_charge):
        self.request["loading_charge"] = loading_charge

        result = self.validator.validate(self.request)

        assert result.errors == ["Loading charge must be a valid number (0 or greater)"]

    def test_null_loading_charge(self):
        self.request["loading_charge"] = None

        result = self.validator.validate(self.request)

        assert result.errors == ["Loading charge is required (can be 0)"]

    def test_empty_products(self):
        self.request["products"] = []

        result = self.validator.validate(self.request)

        assert result.errors == ["At least one product is required"]

    def test_each_product_reported_by_position(self):
        self.request["products"].append(
            {"description": "", "hsn": " ", "quantity": -5, "rate": "100", "per": ""}
        )

        result = self.validator.validate(self.request)

        assert result.errors == [
            "Product 2: Description is required",
            "Product 2: HSN code is required",
            "Product 2: Quantity must be a number greater than 0",
            "Product 2: Rate must be a number greater than 0",
            "Product 2: Unit (Per) is required",
        ]

    def test_product_not_a_dictionary(self):
        self.request["products"] = ["Leaf Spring"]

        result = self.validator.validate(self.request)

        assert result.errors == ["Product 1: must be a dictionary"]

    def test_validate_safe_returns_tuple(self):
        is_valid, errors = self.validator.validate_safe({})

        assert is_valid is False
        assert len(errors) > 0

    def test_convenience_function(self):
        assert validate_invoice(self.request)
        assert not validate_invoice({})


class TestLenientNumberParsing:
    """Raw form input parsing"""

    @pytest.mark.parametrize("raw, expected", [
        ("12", 12.0),
        (" 3.5 ", 3.5),
        ("12kg", 12.0),
        (".5", 0.5),
        ("1e2", 100.0),
        ("-4", -4.0),
        (7, 7.0),
    ])
    def test_parses_leading_number(self, raw, expected):
        assert parse_number(raw) == expected

    @pytest.mark.parametrize("raw", ["", "abc", None, True, "kg12"])
    def test_unparseable_gives_none(self, raw):
        assert parse_number(raw) is None

    def test_unparseable_defaults_to_zero(self):
        assert parse_number_or_zero("abc") == 0.0
        assert parse_number_or_zero(float('nan')) == 0.0
        assert parse_number_or_zero("") == 0.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
