"""
Invoice entry form

Holds the raw text a user typed, row by row, and turns it into validated
line items and a document service request.
"""

import logging
from datetime import date
from typing import List, Optional

from pydantic import BaseModel

from calculator.totals import calculate_totals
from models.invoice import InvoiceRequest, InvoiceTotals, LineItem
from utils.exceptions import InvoiceValidationError, SessionError
from utils.formatting import format_date_for_api
from utils.validators import parse_number, parse_number_or_zero

logger = logging.getLogger(__name__)

OTHER_COMPANY = "other"
DEFAULT_UNIT = "Nos"
UNITS = ["Kg", "Nos"]


class SessionState(BaseModel):
    """Caller-owned session value, handed to operations that need it"""
    authenticated: bool = False
    username: Optional[str] = None

    def require_authenticated(self):
        if not self.authenticated:
            raise SessionError("Login required to generate invoices")


class ItemIdSequence:
    """Row identifier generator owned by the form's caller"""

    def __init__(self, start: int = 0):
        self._start = start
        self._current = start

    def next_id(self) -> int:
        self._current += 1
        return self._current

    @property
    def current(self) -> int:
        return self._current

    def reset(self):
        self._current = self._start


class ItemRow(BaseModel):
    """One product row as typed, every field still raw text"""
    row_id: int
    description: str = ""
    hsn: str = ""
    quantity: str = "1"
    rate: str = "0"
    per: str = DEFAULT_UNIT

    def is_empty(self) -> bool:
        """No data entered at all (unit always has a value)"""
        return not any(
            value.strip() for value in (self.description, self.hsn, self.quantity, self.rate)
        )

    def amount(self) -> float:
        return parse_number_or_zero(self.quantity) * parse_number_or_zero(self.rate)


class InvoiceForm:
    """
    Invoice entry form state

    Replaces the page's DOM: header fields, company selection, product
    rows and the loading charge, all kept as entered.
    """

    def __init__(self, sequence: ItemIdSequence = None, today: date = None):
        self.sequence = sequence or ItemIdSequence()
        self._today = today
        self.rows: List[ItemRow] = []
        self._clear_fields()
        self.add_row()

    def _clear_fields(self):
        self.company_key = ""
        self.buyer_name = ""
        self.buyer_address = ""
        self.bill_no = ""
        self.challan_no = ""
        self.bill_date = (self._today or date.today()).isoformat()
        self.vehicle_no = ""
        self.place_of_delivery = ""
        self.loading_charge = "0"

    # ------------------------------------------------------------------
    # Row management
    # ------------------------------------------------------------------

    def add_row(self, **fields) -> ItemRow:
        row = ItemRow(row_id=self.sequence.next_id(), **fields)
        self.rows.append(row)
        return row

    def remove_row(self, row_id: int) -> bool:
        for i, row in enumerate(self.rows):
            if row.row_id == row_id:
                del self.rows[i]
                return True
        return False

    def get_row(self, row_id: int) -> Optional[ItemRow]:
        return next((row for row in self.rows if row.row_id == row_id), None)

    def update_row(self, row_id: int, **fields) -> ItemRow:
        row = self.get_row(row_id)
        if row is None:
            raise KeyError(f"Item row {row_id} not found")
        for name, value in fields.items():
            setattr(row, name, value)
        return row

    def reset(self):
        """Clear everything and start again with one fresh row"""
        self._clear_fields()
        self.rows = []
        self.sequence.reset()
        self.add_row()

    # ------------------------------------------------------------------
    # Company selection
    # ------------------------------------------------------------------

    def select_company(self, key: str, directory=None):
        """
        Pick the buyer from the company directory

        "other" clears name and address for manual entry; an unknown key
        clears the selection.
        """
        self.buyer_name = ""
        self.buyer_address = ""

        if key == OTHER_COMPANY:
            self.company_key = OTHER_COMPANY
        elif key and directory is not None and key in directory:
            company = directory.get(key)
            self.company_key = key
            self.buyer_name = company.name
            self.buyer_address = company.address
        else:
            self.company_key = ""

    # ------------------------------------------------------------------
    # Totals
    # ------------------------------------------------------------------

    def row_amount(self, row_id: int) -> Optional[float]:
        row = self.get_row(row_id)
        if row is None:
            logger.warning("Item row not found: item-%s", row_id)
            return None
        return row.amount()

    def live_totals(self) -> InvoiceTotals:
        """Totals over every row as currently typed, blanks count as 0"""
        return calculate_totals(
            ((parse_number_or_zero(row.quantity), parse_number_or_zero(row.rate)) for row in self.rows),
            parse_number_or_zero(self.loading_charge)
        )

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def collect_items(self) -> List[LineItem]:
        """
        Validated line items, skipping rows left completely empty

        Raises:
            InvoiceValidationError: one message per offending field
        """
        items = []
        errors = []

        for index, row in enumerate(self.rows, 1):
            if row.is_empty():
                continue

            description = row.description.strip()
            hsn = row.hsn.strip()
            quantity = parse_number(row.quantity.strip())
            rate = parse_number(row.rate.strip())
            per = (row.per or DEFAULT_UNIT).strip()

            row_errors = []
            if not description:
                row_errors.append(f"Product {index}: Name is required")
            if not hsn:
                row_errors.append(f"Product {index}: HSN code is required")
            if quantity is None or not quantity > 0:
                row_errors.append(f"Product {index}: Quantity must be greater than 0")
            if rate is None or not rate > 0:
                row_errors.append(f"Product {index}: Rate must be greater than 0")
            if not per:
                row_errors.append(f"Product {index}: Unit (Per) is required")

            if row_errors:
                errors.extend(row_errors)
                continue

            items.append(LineItem(
                description=description,
                hsn_code=hsn,
                quantity=quantity,
                rate=rate,
                unit=per
            ))

        if errors:
            raise InvoiceValidationError(errors)
        if not items:
            raise InvoiceValidationError(["Please add at least one valid product with all required fields"])

        return items

    def parsed_loading_charge(self) -> float:
        raw = (self.loading_charge or "").strip()
        if not raw:
            return 0.0
        value = parse_number(raw)
        if value is None or not value >= 0:
            raise InvoiceValidationError(["Loading charge must be a valid number (0 or greater)"])
        return value

    def build_request(self, session: SessionState = None) -> InvoiceRequest:
        """
        Assemble the document service request from the form

        Raises:
            SessionError: a session was given but is not authenticated
            InvoiceValidationError: missing company, products, charge or date
        """
        if session is not None:
            session.require_authenticated()

        errors = []

        if not self.company_key:
            errors.append("Please select a company")

        items: List[LineItem] = []
        try:
            items = self.collect_items()
        except InvoiceValidationError as e:
            errors.extend(e.errors)

        loading_charge = 0.0
        try:
            loading_charge = self.parsed_loading_charge()
        except InvoiceValidationError as e:
            errors.extend(e.errors)

        bill_date = ""
        if not self.bill_date:
            errors.append("Date is required")
        else:
            try:
                bill_date = format_date_for_api(self.bill_date)
            except ValueError:
                errors.append("Date must be a valid date")

        if errors:
            raise InvoiceValidationError(errors)

        return InvoiceRequest(
            buyer_name=self.buyer_name.strip(),
            buyer_address=self.buyer_address.strip(),
            bill_no=self.bill_no.strip(),
            challan_no=self.challan_no.strip(),
            date=bill_date,
            vehicle_no=self.vehicle_no.strip(),
            place_of_delivery=self.place_of_delivery.strip(),
            loading_charge=loading_charge,
            products=items
        )
