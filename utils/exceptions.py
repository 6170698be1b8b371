"""
Error types raised across the invoice builder
"""

from typing import List, Optional


class InvoiceValidationError(ValueError):
    """Malformed or missing invoice fields, one message per offending field"""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Invoice validation failed")

    def format_message(self) -> str:
        return "Please fix the following errors:\n\n" + "\n".join(self.errors)


class TransportError(RuntimeError):
    """Document service call failed"""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class SessionError(PermissionError):
    """Operation attempted without an authenticated session"""
