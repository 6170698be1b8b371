"""
Display helpers for amounts, dates and file names
"""

import re
from datetime import date, datetime
from typing import Union


CURRENCY_SYMBOL = "₹"
_UNSAFE_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*]')


def format_currency(amount: float) -> str:
    """₹ prefix, two decimals, comma thousands separators"""
    return f"{CURRENCY_SYMBOL}{amount:,.2f}"


def format_round_off(round_off: float) -> str:
    """Round off carries an explicit '+' when non-negative"""
    formatted = format_currency(round_off)
    if round_off >= 0:
        return "+" + formatted
    return formatted


def _to_date(value: Union[str, date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip())


def format_date_for_api(value: Union[str, date, datetime]) -> str:
    """ISO date (or date object) to DD-MM-YYYY; empty input gives ''"""
    if not value:
        return ""
    return _to_date(value).strftime("%d-%m-%Y")


def format_display_date(value: Union[str, date, datetime]) -> str:
    """DD/MM/YYYY as shown in the invoice preview"""
    if not value:
        return ""
    if isinstance(value, str) and re.match(r'^\d{2}-\d{2}-\d{4}$', value.strip()):
        return value.strip().replace("-", "/")
    return _to_date(value).strftime("%d/%m/%Y")


def sanitize_filename(name: str) -> str:
    """Keep spaces, drop characters not allowed in file names"""
    return _UNSAFE_FILENAME_CHARS.sub("", name).strip()


def document_filename(buyer_name: str, bill_no: str, extension: str = "pdf") -> str:
    return f"{sanitize_filename(buyer_name)} {sanitize_filename(bill_no)}.{extension}"
