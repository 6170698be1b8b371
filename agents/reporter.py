"""
Reporter Agent
Generates invoice previews and exports
"""

import json
from datetime import datetime
from typing import Dict, Optional
from models.invoice import InvoiceRequest, InvoiceTotals
from models.validation import CategoryResult, CheckStatus
from utils.formatting import format_currency, format_display_date, format_round_off


class ReporterAgent:
    """
    Reporter Agent

    Generates reports in various formats:
    - Console (colored invoice preview)
    - JSON (invoice with rounded totals)
    - Totals only (quick summary)
    """

    def __init__(self, config: dict = None, use_color: bool = True):
        self.config = config or {}

        # ANSI color codes
        self.colors = {
            'green': '\033[92m',
            'red': '\033[91m',
            'yellow': '\033[93m',
            'blue': '\033[94m',
            'gray': '\033[90m',
            'bold': '\033[1m',
            'reset': '\033[0m'
        }
        if not use_color:
            self.colors = {key: '' for key in self.colors}

    def generate_console_report(
        self,
        request: InvoiceRequest,
        totals: InvoiceTotals,
        checks: Optional[CategoryResult] = None
    ) -> str:
        """Generate invoice preview with colors"""

        lines = []

        # Header
        lines.append("=" * 80)
        lines.append(f"{self.colors['bold']}INVOICE{self.colors['reset']}")
        lines.append("=" * 80)
        lines.append(f"  Bill #: {request.bill_no}")
        lines.append(f"  Challan #: {request.challan_no or '-'}")
        lines.append(f"  Date: {format_display_date(request.date)}")
        lines.append(f"  Vehicle No: {request.vehicle_no or '-'}")
        lines.append(f"  Place of Delivery: {request.place_of_delivery or '-'}")
        lines.append("")

        # Buyer
        lines.append(f"{self.colors['bold']}Bill To:{self.colors['reset']}")
        lines.append(f"  {request.buyer_name}")
        for address_line in request.buyer_address.splitlines():
            lines.append(f"  {address_line}")
        lines.append("")

        # Items
        lines.append("-" * 80)
        lines.append(f"  {'Description':<26}{'HSN':<10}{'Quantity':>10}{'Rate':>12}  {'Per':<5}{'Amount':>13}")
        lines.append("-" * 80)
        for item in request.products:
            lines.append(
                f"  {item.description[:25]:<26}{item.hsn_code[:9]:<10}{item.quantity:>10g}"
                f"{format_currency(item.rate):>12}  {item.unit[:4]:<5}{format_currency(item.amount):>13}"
            )
        lines.append("-" * 80)

        lines.extend(self._totals_lines(totals))

        # Consistency checks
        if checks is not None:
            lines.append("")
            lines.append("-" * 80)
            lines.append(f"{self.colors['bold']}Category {checks.category}: {checks.category_name}{self.colors['reset']}")
            lines.append(f"  Summary: {checks.passed_count} passed, {checks.failed_count} failed, {checks.skipped_count} skipped")
            for check in checks.checks:
                status_color = self._get_status_color(check.status.value)
                lines.append(
                    f"  {status_color}{self._get_status_symbol(check.status)} {check.check_id}: "
                    f"{check.check_name}{self.colors['reset']}"
                )
                if check.status == CheckStatus.FAIL:
                    lines.append(f"    {check.reasoning}")

        # Footer
        lines.append("=" * 80)
        lines.append(f"Report generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        lines.append("=" * 80)

        return "\n".join(lines)

    def generate_totals_report(self, totals: InvoiceTotals) -> str:
        """Totals block on its own"""
        return "\n".join(self._totals_lines(totals))

    def _totals_lines(self, totals: InvoiceTotals):
        rows = [
            ("Product Total:", format_currency(totals.product_total)),
            ("Loading Charge:", format_currency(totals.loading_charge)),
            ("Total Amount:", format_currency(totals.total_amount)),
            ("GST (18%):", format_currency(totals.gst_amount)),
            ("CGST (9%):", format_currency(totals.cgst)),
            ("SGST (9%):", format_currency(totals.sgst)),
            ("Round Off:", format_round_off(totals.round_off)),
        ]
        lines = [f"  {label:<24}{value:>20}" for label, value in rows]
        lines.append(
            f"  {self.colors['bold']}{'Final Payable Amount:':<24}"
            f"{format_currency(totals.final_amount):>20}{self.colors['reset']}"
        )
        return lines

    def build_json_report(self, request: InvoiceRequest, totals: InvoiceTotals) -> Dict:
        """Invoice export with totals rounded to 2 decimals"""
        return {
            'name': request.buyer_name,
            'address': request.buyer_address,
            'bill_no': request.bill_no,
            'challan_no': request.challan_no,
            'date': request.date,
            'vehicle_no': request.vehicle_no,
            'place_of_delivery': request.place_of_delivery,
            'product_details': [item.to_payload() for item in request.products],
            'loading_charge': request.loading_charge,
            'totals': totals.rounded()
        }

    def generate_json_report(self, request: InvoiceRequest, totals: InvoiceTotals) -> str:
        """Generate JSON report"""
        return json.dumps(self.build_json_report(request, totals), indent=2, ensure_ascii=False)

    def _get_status_symbol(self, status: CheckStatus) -> str:
        """Get status symbol"""
        symbols = {
            CheckStatus.PASS: '✓',
            CheckStatus.FAIL: '✗',
            CheckStatus.SKIPPED: '○'
        }
        return symbols.get(status, '?')

    def _get_status_color(self, status: str) -> str:
        """Get color for status"""
        if status == 'PASS':
            return self.colors['green']
        elif status == 'FAIL':
            return self.colors['red']
        else:
            return self.colors['gray']
