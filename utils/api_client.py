"""
Document service client

Sends an invoice request to the remote rendering service and hands back
whatever document it produces.
"""

import logging
from typing import Any, Dict, Optional

import requests

from models.invoice import InvoiceRequest, RenderedDocument
from utils.exceptions import TransportError
from utils.formatting import document_filename

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://thepartykart.com"
GENERATE_INVOICE_ENDPOINT = "/v1/bill/generate-invoice"


class DocumentServiceClient:
    """
    HTTP client for the invoice document service

    Usage:
        client = DocumentServiceClient.from_config(config)
        document = client.generate_invoice(request)
        Path(document.filename).write_bytes(document.content)
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        endpoint: str = GENERATE_INVOICE_ENDPOINT,
        timeout: float = 30,
        session: Optional[requests.Session] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.endpoint = endpoint
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config: Dict[str, Any], session: Optional[requests.Session] = None) -> "DocumentServiceClient":
        api = config.get('api', {})
        return cls(
            base_url=api.get('base_url', DEFAULT_BASE_URL),
            endpoint=api.get('endpoint', GENERATE_INVOICE_ENDPOINT),
            timeout=api.get('timeout', 30),
            session=session
        )

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.endpoint}"

    def generate_invoice(self, request: InvoiceRequest) -> RenderedDocument:
        """
        Request the rendered invoice

        Raises:
            TransportError: connection failure, non-2xx status or empty body
        """
        payload = request.to_payload()
        logger.info("[API Request] POST %s", self.url)

        try:
            response = self.session.post(
                self.url,
                json=payload,
                headers={'Content-Type': 'application/json'},
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error("[API Request Failed]: %s", e)
            raise TransportError(
                "Unable to connect to server. Please check your connection and try again."
            ) from e

        if not response.ok:
            logger.error("[API Error] %s %s: %s", response.status_code, response.reason, response.text)
            raise TransportError(
                f"API Error: {response.status_code} {response.reason}",
                status_code=response.status_code,
                body=response.text
            )

        content = response.content or b""
        if not content:
            raise TransportError("Received empty response from server", status_code=response.status_code)

        content_type = response.headers.get('content-type', '')
        filename = document_filename(request.buyer_name, request.bill_no)

        if 'application/json' in content_type:
            try:
                body = response.json()
            except ValueError as e:
                raise TransportError("Document service returned malformed JSON",
                                     status_code=response.status_code) from e
            return RenderedDocument(
                content=content,
                content_type=content_type,
                filename=filename,
                payload=body if isinstance(body, dict) else {'data': body}
            )

        return RenderedDocument(
            content=content,
            content_type=content_type or 'application/octet-stream',
            filename=filename
        )

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
