"""
Document service client tests
HTTP layer is replaced with a mocked requests.Session
"""

import json
from unittest.mock import MagicMock

import pytest
import requests

from models.invoice import InvoiceRequest, LineItem
from utils.api_client import DocumentServiceClient
from utils.exceptions import TransportError


def make_response(status=200, content=b"", content_type="application/pdf", reason="OK"):
    response = requests.Response()
    response.status_code = status
    response._content = content
    response.reason = reason
    response.headers['Content-Type'] = content_type
    return response


@pytest.fixture
def invoice_request():
    return InvoiceRequest(
        buyer_name=" Pearl Auto Springs ",
        buyer_address="Shop No- 36, Truck Terminal",
        bill_no="101",
        challan_no="55",
        date="15-09-2024",
        vehicle_no="",
        place_of_delivery="Kalamboli",
        loading_charge=10,
        products=[LineItem(description="Leaf Spring", hsn_code="7320", quantity=2, rate=100)]
    )


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(session):
    return DocumentServiceClient(base_url="https://billing.example.test/", timeout=5, session=session)


class TestDocumentServiceClient:

    def test_posts_sanitized_payload(self, client, session, invoice_request):
        session.post.return_value = make_response(content=b"%PDF-1.4 invoice")

        client.generate_invoice(invoice_request)

        args, kwargs = session.post.call_args
        assert args[0] == "https://billing.example.test/v1/bill/generate-invoice"
        assert kwargs['timeout'] == 5
        assert kwargs['json']['buyer_name'] == "Pearl Auto Springs"
        assert kwargs['json']['loading_charge'] == 10.0
        assert kwargs['json']['products'] == [
            {"description": "Leaf Spring", "hsn": "7320", "quantity": 2.0, "rate": 100.0, "per": "Nos"}
        ]

    def test_pdf_response_is_opaque_document(self, client, session, invoice_request):
        session.post.return_value = make_response(content=b"%PDF-1.4 invoice")

        document = client.generate_invoice(invoice_request)

        assert document.is_binary
        assert document.content == b"%PDF-1.4 invoice"
        assert document.size == len(b"%PDF-1.4 invoice")
        assert document.filename == "Pearl Auto Springs 101.pdf"
        assert document.reported_totals() is None

    def test_json_response_keeps_payload(self, client, session, invoice_request):
        body = {"status": "ok", "totals": {"final_amount": 248}}
        session.post.return_value = make_response(
            content=json.dumps(body).encode(), content_type="application/json"
        )

        document = client.generate_invoice(invoice_request)

        assert not document.is_binary
        assert document.payload == body
        assert document.reported_totals() == {"final_amount": 248}

    def test_http_error_raises_transport_error(self, client, session, invoice_request):
        session.post.return_value = make_response(
            status=500, content=b"boom", content_type="text/plain", reason="Internal Server Error"
        )

        with pytest.raises(TransportError) as exc_info:
            client.generate_invoice(invoice_request)

        assert exc_info.value.status_code == 500
        assert "500 Internal Server Error" in str(exc_info.value)

    def test_connection_failure_raises_transport_error(self, client, session, invoice_request):
        session.post.side_effect = requests.ConnectionError("refused")

        with pytest.raises(TransportError) as exc_info:
            client.generate_invoice(invoice_request)

        assert "Unable to connect to server" in str(exc_info.value)
        assert exc_info.value.status_code is None

    def test_empty_body_raises_transport_error(self, client, session, invoice_request):
        session.post.return_value = make_response(content=b"")

        with pytest.raises(TransportError, match="empty response"):
            client.generate_invoice(invoice_request)

    def test_from_config(self, session):
        client = DocumentServiceClient.from_config(
            {'api': {'base_url': 'http://localhost:8000/', 'endpoint': '/render', 'timeout': 2}},
            session=session
        )

        assert client.url == "http://localhost:8000/render"
        assert client.timeout == 2

    def test_context_manager_closes_session(self, session):
        with DocumentServiceClient(session=session):
            pass

        session.close.assert_called_once()
