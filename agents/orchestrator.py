"""
Orchestrator Agent
Coordinates the invoice workflow from form to rendered document
"""

import logging
from typing import Dict, Optional
from datetime import datetime

from calculator.totals import compute
from models.form import InvoiceForm, SessionState
from models.invoice import InvoiceRequest
from utils.api_client import DocumentServiceClient
from utils.exceptions import InvoiceValidationError, TransportError
from utils.validators import InvoiceValidator
from validators.arithmetic_validator import TotalsConsistencyValidator

logger = logging.getLogger(__name__)


class OrchestratorAgent:
    """
    Orchestrator Agent

    Coordinates the invoice workflow:
    1. Check the session
    2. Build and validate the request (abort before any remote call)
    3. Compute totals and run consistency checks
    4. Request the rendered document
    5. Compare the service's totals with the local preview, when reported
    """

    def __init__(self, config: dict = None, client: Optional[DocumentServiceClient] = None):
        self.config = config or {}

        self.request_validator = InvoiceValidator()
        self.consistency_validator = TotalsConsistencyValidator(self.config)
        self.client = client or DocumentServiceClient.from_config(self.config)

    def generate(self, form: InvoiceForm, session: SessionState, preview_only: bool = False) -> Dict:
        """
        Generate an invoice from the entry form

        Raises:
            SessionError: session not authenticated
            InvoiceValidationError: form or request invalid
        """
        session.require_authenticated()
        request = form.build_request()
        return self.process_request(request, preview_only=preview_only)

    def process_request(self, request: InvoiceRequest, preview_only: bool = False) -> Dict:
        """
        Validate, compute and render one invoice request

        Returns:
            {
                'status': 'success' | 'preview' | 'transport_error',
                'request': InvoiceRequest,
                'totals': InvoiceTotals,
                'checks': CategoryResult,
                'document': RenderedDocument | None,
                'error': str | None,
                'processing_time_ms': float
            }
        """
        start_time = datetime.now()

        # Validation failures abort before the document service is contacted
        validation = self.request_validator.validate(request.to_payload())
        if not validation:
            logger.warning("Invoice %s rejected: %d validation errors", request.bill_no, len(validation.errors))
            raise InvoiceValidationError(validation.errors)

        totals = compute(request.products, request.loading_charge)
        checks = self.consistency_validator.validate(request.products, totals)

        result = {
            'status': 'preview',
            'request': request,
            'totals': totals,
            'checks': checks,
            'document': None,
            'error': None
        }

        if not preview_only:
            try:
                document = self.client.generate_invoice(request)
            except TransportError as e:
                # Totals stay available for local display
                logger.error("Document request failed for bill %s: %s", request.bill_no, e)
                result['status'] = 'transport_error'
                result['error'] = f"Error generating invoice. {e}"
            else:
                result['status'] = 'success'
                result['document'] = document

                remote_totals = document.reported_totals()
                if remote_totals:
                    result['checks'] = self.consistency_validator.validate(
                        request.products, totals, remote_totals
                    )

        end_time = datetime.now()
        result['processing_time_ms'] = (end_time - start_time).total_seconds() * 1000

        return result
