"""
Validation Layer for Invoice Data
Catches malformed data before totals are computed or the document service is called
"""

import math
import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

from models.invoice import LineItem
from utils.exceptions import InvoiceValidationError


_NUMBER_PREFIX = re.compile(r'^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?')


def parse_number(value: Any) -> Optional[float]:
    """
    Lenient numeric parsing for raw form input

    Numbers pass through, strings are read up to the first character that
    cannot belong to a number ("12kg" -> 12.0). Returns None when nothing
    numeric can be read.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    match = _NUMBER_PREFIX.match(str(value).strip())
    if not match:
        return None
    return float(match.group(0))


def parse_number_or_zero(value: Any) -> float:
    """Unparseable or missing input defaults to 0"""
    number = parse_number(value)
    if number is None or math.isnan(number):
        return 0.0
    return number


def is_number(value: Any) -> bool:
    """Real, finite number (bools excluded)"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or len(value.strip()) == 0


class ValidationResult:
    """Result of validation check"""

    def __init__(self, is_valid: bool, errors: List[str] = None):
        self.is_valid = is_valid
        self.errors = errors or []

    def __bool__(self):
        return self.is_valid

    def add_error(self, error: str):
        self.errors.append(error)
        self.is_valid = False

    def raise_for_errors(self):
        if not self.is_valid:
            raise InvoiceValidationError(self.errors)


class InvoiceValidator:
    """
    Invoice request validator

    Checks the JSON body sent to the document service and reports every
    problem found, one message per field or product.
    """

    def __init__(self):
        self.date_pattern = re.compile(r'^\d{2}-\d{2}-\d{4}$')
        self.required_text_fields = [
            ('bill_no', 'Bill number is required'),
            ('challan_no', 'Challan number is required'),
            ('place_of_delivery', 'Place of delivery is required'),
        ]

    def validate(self, invoice_data: Dict) -> ValidationResult:
        """
        Validation of an invoice request body

        Args:
            invoice_data: Request dictionary to validate

        Returns:
            ValidationResult with is_valid flag and error list
        """
        result = ValidationResult(is_valid=True)

        if not isinstance(invoice_data, dict):
            result.add_error("Invoice data must be a dictionary")
            return result

        # 1. Buyer details
        self._validate_buyer(invoice_data, result)

        # 2. Document numbers and delivery details
        self._validate_document_fields(invoice_data, result)

        # 3. Date
        self._validate_date(invoice_data, result)

        # 4. Loading charge
        self._validate_loading_charge(invoice_data.get('loading_charge'), result, present='loading_charge' in invoice_data)

        # 5. Products
        self._validate_products(invoice_data.get('products'), result)

        return result

    def _validate_buyer(self, data: Dict, result: ValidationResult):
        """Buyer name and address lengths"""
        name = data.get('buyer_name')
        if _is_blank(name) or len(name.strip()) < 2:
            result.add_error("Buyer name is required and must be at least 2 characters long")

        address = data.get('buyer_address')
        if _is_blank(address) or len(address.strip()) < 10:
            result.add_error("Buyer address is required and must be at least 10 characters long")

    def _validate_document_fields(self, data: Dict, result: ValidationResult):
        for field, message in self.required_text_fields:
            if _is_blank(data.get(field)):
                result.add_error(message)

        # May be empty, but must be present
        if data.get('vehicle_no') is None:
            result.add_error("Vehicle number field is required (can be empty)")

    def _validate_date(self, data: Dict, result: ValidationResult):
        value = data.get('date')
        if _is_blank(value):
            result.add_error("Date is required")
        elif not self.date_pattern.match(value):
            result.add_error("Date must be in DD-MM-YYYY format")

    def _validate_loading_charge(self, value: Any, result: ValidationResult, present: bool = True):
        if not present or value is None:
            result.add_error("Loading charge is required (can be 0)")
        elif not is_number(value) or value < 0:
            result.add_error("Loading charge must be a valid number (0 or greater)")

    def _validate_products(self, products: Any, result: ValidationResult):
        """Validate each product entry"""

        if not isinstance(products, list) or len(products) == 0:
            result.add_error("At least one product is required")
            return

        for i, product in enumerate(products, 1):
            if not isinstance(product, dict):
                result.add_error(f"Product {i}: must be a dictionary")
                continue

            if _is_blank(product.get('description')):
                result.add_error(f"Product {i}: Description is required")

            if _is_blank(product.get('hsn')):
                result.add_error(f"Product {i}: HSN code is required")

            quantity = product.get('quantity')
            if not is_number(quantity) or quantity <= 0:
                result.add_error(f"Product {i}: Quantity must be a number greater than 0")

            rate = product.get('rate')
            if not is_number(rate) or rate <= 0:
                result.add_error(f"Product {i}: Rate must be a number greater than 0")

            if _is_blank(product.get('per')):
                result.add_error(f"Product {i}: Unit (Per) is required")

    def validate_items(self, items: Sequence[LineItem], loading_charge: Any) -> ValidationResult:
        """
        Validate the calculator inputs

        Same rules as the request body, applied to LineItem objects.
        """
        result = ValidationResult(is_valid=True)

        if not items:
            result.add_error("At least one product is required")
        else:
            self._validate_products([item.to_payload() for item in items], result)

        self._validate_loading_charge(loading_charge, result)
        return result

    def validate_safe(self, invoice_data: Dict) -> Tuple[bool, List[str]]:
        """
        Safe validation that never throws exceptions

        Returns:
            (is_valid, error_list)
        """
        try:
            result = self.validate(invoice_data)
            return result.is_valid, result.errors
        except Exception as e:
            return False, [f"Validation error: {str(e)}"]


# Convenience function
def validate_invoice(invoice_data: Dict) -> ValidationResult:
    """
    Quick validation function

    Usage:
        result = validate_invoice(request_json)
        if result:
            # Send to document service
        else:
            print(f"Validation errors: {result.errors}")
    """
    validator = InvoiceValidator()
    return validator.validate(invoice_data)
