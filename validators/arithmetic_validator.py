"""
Totals consistency validator (Category C)
Re-derives every total and checks it against the computed figures
"""

from typing import Any, Dict, Optional, Sequence

from calculator.totals import GST_RATE, custom_round
from models.invoice import InvoiceTotals, LineItem
from models.validation import CheckResult, CategoryResult, CheckStatus, Severity


class TotalsConsistencyValidator:
    """
    Category C: Arithmetic & Calculation Consistency (7 checks)

    Checks use exact float equality: the figures are re-derived with the
    same operations in the same order, so any difference is a real defect.
    """

    def __init__(self, config: dict = None):
        self.config = config or {}

    def validate(
        self,
        items: Sequence[LineItem],
        totals: InvoiceTotals,
        remote_totals: Optional[Dict[str, Any]] = None
    ) -> CategoryResult:
        """Execute all consistency checks"""

        checks = []

        # C1: Product total is the ordered sum of line amounts
        checks.append(self._check_c1_product_total(items, totals))

        # C2: Total amount includes loading charge
        checks.append(self._check_c2_total_amount(totals))

        # C3: GST at 18%
        checks.append(self._check_c3_gst_amount(totals))

        # C4: CGST/SGST split
        checks.append(self._check_c4_tax_split(totals))

        # C5: Round off absorbs the rounding gap
        checks.append(self._check_c5_round_off(totals))

        # C6: Final amount is the custom-rounded integer
        checks.append(self._check_c6_final_amount(totals))

        # C7: Document service agrees with the local preview
        checks.append(self._check_c7_remote_agreement(totals, remote_totals))

        return CategoryResult(
            category='C',
            category_name='Arithmetic & Calculation',
            checks=checks
        )

    def _result(self, check_id: str, name: str, passed: bool, reasoning: str,
                severity: Severity = Severity.HIGH) -> CheckResult:
        return CheckResult(
            check_id=check_id,
            check_name=name,
            status=CheckStatus.PASS if passed else CheckStatus.FAIL,
            reasoning=reasoning,
            severity=severity if not passed else Severity.MEDIUM
        )

    def _check_c1_product_total(self, items: Sequence[LineItem], totals: InvoiceTotals) -> CheckResult:
        """C1: Sum of quantity x rate in listed order"""

        expected = 0.0
        for item in items:
            expected += item.quantity * item.rate

        if expected == totals.product_total:
            return self._result('C1', 'Product Total Calculation', True,
                                f'Product total ₹{totals.product_total:.2f} matches {len(items)} line items')
        return self._result('C1', 'Product Total Calculation', False,
                            f'Product total mismatch: Expected ₹{expected:.2f}, got ₹{totals.product_total:.2f}')

    def _check_c2_total_amount(self, totals: InvoiceTotals) -> CheckResult:
        """C2: Total amount = product total + loading charge"""

        expected = totals.product_total + totals.loading_charge
        passed = expected == totals.total_amount
        reasoning = (
            f'Total amount ₹{totals.total_amount:.2f} includes loading charge ₹{totals.loading_charge:.2f}'
            if passed else
            f'Total mismatch: Expected ₹{expected:.2f}, got ₹{totals.total_amount:.2f}'
        )
        return self._result('C2', 'Total Amount Calculation', passed, reasoning)

    def _check_c3_gst_amount(self, totals: InvoiceTotals) -> CheckResult:
        """C3: GST = total amount x 0.18"""

        expected = totals.total_amount * GST_RATE
        passed = expected == totals.gst_amount
        reasoning = (
            f'GST ₹{totals.gst_amount:.2f} is 18% of ₹{totals.total_amount:.2f}'
            if passed else
            f'GST mismatch: Expected ₹{expected:.2f}, got ₹{totals.gst_amount:.2f}'
        )
        return self._result('C3', 'GST Calculation Accuracy', passed, reasoning, Severity.CRITICAL)

    def _check_c4_tax_split(self, totals: InvoiceTotals) -> CheckResult:
        """C4: CGST = SGST = GST / 2"""

        half = totals.gst_amount / 2
        passed = totals.cgst == half and totals.sgst == half
        reasoning = (
            f'CGST ₹{totals.cgst:.2f} and SGST ₹{totals.sgst:.2f} split GST evenly'
            if passed else
            f'Tax split mismatch: Expected ₹{half:.2f} each, got CGST ₹{totals.cgst:.2f}, SGST ₹{totals.sgst:.2f}'
        )
        return self._result('C4', 'CGST/SGST Split', passed, reasoning)

    def _check_c5_round_off(self, totals: InvoiceTotals) -> CheckResult:
        """C5: Round off = final amount - (total amount + GST)"""

        before_round = totals.total_amount + totals.gst_amount
        expected = totals.final_amount - before_round
        passed = before_round == totals.final_before_round and expected == totals.round_off
        reasoning = (
            f'Round off {totals.round_off:+.2f} bridges ₹{before_round:.2f} to ₹{totals.final_amount}'
            if passed else
            f'Round off mismatch: Expected {expected:+.2f}, got {totals.round_off:+.2f}'
        )
        return self._result('C5', 'Round Off Calculation', passed, reasoning)

    def _check_c6_final_amount(self, totals: InvoiceTotals) -> CheckResult:
        """C6: Final amount is an integer from custom_round"""

        expected = custom_round(totals.final_before_round)
        passed = isinstance(totals.final_amount, int) and expected == totals.final_amount
        reasoning = (
            f'Final amount ₹{totals.final_amount} rounded from ₹{totals.final_before_round:.2f}'
            if passed else
            f'Final amount mismatch: Expected ₹{expected}, got ₹{totals.final_amount}'
        )
        return self._result('C6', 'Final Amount Rounding', passed, reasoning, Severity.CRITICAL)

    def _check_c7_remote_agreement(self, totals: InvoiceTotals,
                                   remote_totals: Optional[Dict[str, Any]]) -> CheckResult:
        """C7: Document service final amount equals local preview"""

        if not remote_totals or 'final_amount' not in remote_totals:
            return CheckResult(
                check_id='C7',
                check_name='Document Service Agreement',
                status=CheckStatus.SKIPPED,
                reasoning='Document service did not report totals',
                severity=Severity.LOW
            )

        remote_final = remote_totals['final_amount']
        try:
            passed = float(remote_final) == totals.final_amount
        except (TypeError, ValueError):
            passed = False

        reasoning = (
            f'Document service final amount ₹{remote_final} matches local preview'
            if passed else
            f'Final amount disagreement: local ₹{totals.final_amount}, document service ₹{remote_final}'
        )
        return self._result('C7', 'Document Service Agreement', passed, reasoning, Severity.CRITICAL)
