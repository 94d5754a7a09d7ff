"""Statutory deductions from the prorated basic salary."""

from __future__ import annotations

from decimal import Decimal

from hrms_payroll.calculators.rounding import percent_of, round_to_cents, to_decimal
from hrms_payroll.calculators.types import ZERO, Deductions, SalaryStructure

DEFAULT_PROFESSIONAL_TAX = Decimal("200")


class DeductionCalculator:
    """Computes provident fund and professional tax.

    Provident fund follows the prorated basic salary: a stored absolute
    amount is turned back into an effective rate against the full basic and
    that rate is applied to the prorated basic. Professional tax is a flat
    monthly charge and is not prorated. Income tax, TDS, loan and other
    deductions are reserved fields and always zero.
    """

    def __init__(self, default_professional_tax: Decimal = DEFAULT_PROFESSIONAL_TAX):
        self.default_professional_tax = default_professional_tax

    def calculate(
        self,
        structure: SalaryStructure,
        original_basic: Decimal,
        adjusted_basic: Decimal,
    ) -> Deductions:
        return Deductions(
            pf_employee=self._provident_fund(
                structure.pf_employee,
                structure.pf_employee_percentage,
                original_basic,
                adjusted_basic,
            ),
            pf_employer=self._provident_fund(
                structure.pf_employer,
                structure.pf_employer_percentage,
                original_basic,
                adjusted_basic,
            ),
            professional_tax=self._professional_tax(structure.professional_tax),
        )

    @staticmethod
    def _provident_fund(
        stored_amount: Decimal | None,
        percentage: Decimal | None,
        original_basic: Decimal,
        adjusted_basic: Decimal,
    ) -> Decimal:
        amount = to_decimal(stored_amount)
        if amount > 0 and original_basic > 0:
            return round_to_cents(amount * adjusted_basic / original_basic)
        if percentage is not None:
            return percent_of(adjusted_basic, percentage)
        return ZERO

    def _professional_tax(self, stored: Decimal | None) -> Decimal:
        amount = to_decimal(stored)
        # Zero counts as unset
        if amount <= 0:
            return round_to_cents(self.default_professional_tax)
        return round_to_cents(amount)
