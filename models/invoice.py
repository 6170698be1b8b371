"""
Invoice data models using Pydantic
"""

from pydantic import BaseModel, ConfigDict
from typing import Optional, List, Dict, Any


class LineItem(BaseModel):
    """Individual line item in invoice"""
    description: str
    hsn_code: str
    quantity: float
    rate: float
    unit: str = "Nos"

    @property
    def amount(self) -> float:
        """Derived, never stored"""
        return self.quantity * self.rate

    def to_payload(self) -> Dict[str, Any]:
        """Wire form expected by the document service"""
        return {
            'description': self.description.strip(),
            'hsn': self.hsn_code.strip(),
            'quantity': float(self.quantity),
            'rate': float(self.rate),
            'per': self.unit.strip()
        }

    @classmethod
    def from_payload(cls, product: Dict[str, Any]) -> "LineItem":
        return cls(
            description=product['description'],
            hsn_code=product['hsn'],
            quantity=product['quantity'],
            rate=product['rate'],
            unit=product.get('per') or "Nos"
        )


class InvoiceRequest(BaseModel):
    """Request body sent to the document service"""

    # Buyer Information
    buyer_name: str
    buyer_address: str

    # Document Information
    bill_no: str
    challan_no: str
    date: str  # DD-MM-YYYY
    vehicle_no: str = ""
    place_of_delivery: str

    # Financial Details
    loading_charge: float = 0.0
    products: List[LineItem]

    def to_payload(self) -> Dict[str, Any]:
        """Sanitized JSON body, all strings trimmed"""
        return {
            'buyer_name': self.buyer_name.strip(),
            'buyer_address': self.buyer_address.strip(),
            'bill_no': self.bill_no.strip(),
            'challan_no': self.challan_no.strip(),
            'date': self.date.strip(),
            'vehicle_no': (self.vehicle_no or '').strip(),
            'place_of_delivery': self.place_of_delivery.strip(),
            'loading_charge': float(self.loading_charge or 0),
            'products': [item.to_payload() for item in self.products]
        }

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "InvoiceRequest":
        return cls(
            buyer_name=payload['buyer_name'],
            buyer_address=payload['buyer_address'],
            bill_no=payload['bill_no'],
            challan_no=payload['challan_no'],
            date=payload['date'],
            vehicle_no=payload.get('vehicle_no') or '',
            place_of_delivery=payload['place_of_delivery'],
            loading_charge=payload.get('loading_charge', 0),
            products=[LineItem.from_payload(p) for p in payload['products']]
        )


class InvoiceTotals(BaseModel):
    """
    Derived invoice totals

    Immutable once computed. All fields keep full double precision;
    use rounded() for the 2-decimal export view.
    """
    model_config = ConfigDict(frozen=True)

    product_total: float
    loading_charge: float
    total_amount: float
    gst_amount: float
    cgst: float
    sgst: float
    final_before_round: float
    round_off: float
    final_amount: int

    def rounded(self) -> Dict[str, Any]:
        """Totals as exported alongside the invoice JSON"""
        return {
            'product_total': round(self.product_total, 2),
            'total_amount': round(self.total_amount, 2),
            'GST_amount': round(self.gst_amount, 2),
            'CGST': round(self.cgst, 2),
            'SGST': round(self.sgst, 2),
            'round_off': round(self.round_off, 2),
            'final_amount': self.final_amount
        }


class Company(BaseModel):
    """Entry of the buyer company directory"""
    key: str
    name: str
    address: str


class RenderedDocument(BaseModel):
    """Response of the document service, content treated opaquely"""
    content: bytes = b""
    content_type: str = "application/octet-stream"
    filename: str
    payload: Optional[Dict[str, Any]] = None

    @property
    def is_binary(self) -> bool:
        return self.payload is None

    @property
    def size(self) -> int:
        return len(self.content)

    def reported_totals(self) -> Optional[Dict[str, Any]]:
        """Totals echoed back by the service, if it sent any"""
        if not self.payload:
            return None
        totals = self.payload.get('totals')
        if isinstance(totals, dict):
            return totals
        if 'final_amount' in self.payload:
            return {'final_amount': self.payload['final_amount']}
        return None
