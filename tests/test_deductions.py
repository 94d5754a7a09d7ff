"""Tests for statutory deductions."""

from decimal import Decimal

import pytest

from hrms_payroll.calculators.deductions import DeductionCalculator
from hrms_payroll.calculators.types import SalaryStructure

ORIGINAL_BASIC = Decimal("24000.00")
ADJUSTED_BASIC = Decimal("21818.18")


@pytest.fixture
def calculator() -> DeductionCalculator:
    return DeductionCalculator()


def structure(**kwargs) -> SalaryStructure:
    return SalaryStructure(monthly_wage=Decimal("30000"), **kwargs)


class TestProvidentFund:
    """Test PF derivation against the prorated basic."""

    def test_percentage_of_adjusted_basic(self, calculator):
        result = calculator.calculate(
            structure(pf_employee_percentage=Decimal("12"), pf_employer_percentage=Decimal("12")),
            ORIGINAL_BASIC,
            ADJUSTED_BASIC,
        )

        assert result.pf_employee == Decimal("2618.18")
        assert result.pf_employer == Decimal("2618.18")

    def test_stored_amount_scaled_by_basic(self, calculator):
        """12% of the full basic, scaled to the prorated basic."""
        result = calculator.calculate(
            structure(pf_employee=Decimal("2880")),
            ORIGINAL_BASIC,
            ADJUSTED_BASIC,
        )

        assert result.pf_employee == Decimal("2618.18")

    def test_stored_amount_unchanged_at_full_attendance(self, calculator):
        result = calculator.calculate(
            structure(pf_employer=Decimal("1800")),
            ORIGINAL_BASIC,
            ORIGINAL_BASIC,
        )

        assert result.pf_employer == Decimal("1800.00")

    def test_stored_amount_with_zero_basic_uses_percentage(self, calculator):
        result = calculator.calculate(
            structure(pf_employee=Decimal("1800"), pf_employee_percentage=Decimal("12")),
            Decimal("0"),
            Decimal("0"),
        )

        assert result.pf_employee == Decimal("0")

    def test_no_pf_configured(self, calculator):
        result = calculator.calculate(structure(), ORIGINAL_BASIC, ADJUSTED_BASIC)

        assert result.pf_employee == Decimal("0")
        assert result.pf_employer == Decimal("0")


class TestProfessionalTax:
    """Test the flat professional tax."""

    def test_defaults_when_unset(self, calculator):
        result = calculator.calculate(structure(), ORIGINAL_BASIC, ADJUSTED_BASIC)

        assert result.professional_tax == Decimal("200.00")

    def test_zero_falls_back_to_default(self, calculator):
        result = calculator.calculate(
            structure(professional_tax=Decimal("0")), ORIGINAL_BASIC, ADJUSTED_BASIC
        )

        assert result.professional_tax == Decimal("200.00")

    def test_zero_uses_configured_default(self):
        calculator = DeductionCalculator(default_professional_tax=Decimal("175"))

        result = calculator.calculate(
            structure(professional_tax=Decimal("0")), ORIGINAL_BASIC, ADJUSTED_BASIC
        )

        assert result.professional_tax == Decimal("175.00")

    def test_not_prorated(self, calculator):
        result = calculator.calculate(
            structure(professional_tax=Decimal("250")), ORIGINAL_BASIC, Decimal("100")
        )

        assert result.professional_tax == Decimal("250.00")

    def test_configurable_default(self):
        calculator = DeductionCalculator(default_professional_tax=Decimal("150"))

        result = calculator.calculate(structure(), ORIGINAL_BASIC, ADJUSTED_BASIC)

        assert result.professional_tax == Decimal("150.00")


class TestTotals:
    """Test deduction totals."""

    def test_reserved_deductions_are_zero(self, calculator):
        result = calculator.calculate(structure(), ORIGINAL_BASIC, ADJUSTED_BASIC)

        assert result.income_tax == Decimal("0")
        assert result.tds_deduction == Decimal("0")
        assert result.loan_deduction == Decimal("0")
        assert result.other_deductions == Decimal("0")

    def test_total_includes_employer_pf(self, calculator):
        result = calculator.calculate(
            structure(pf_employee_percentage=Decimal("12"), pf_employer_percentage=Decimal("12")),
            ORIGINAL_BASIC,
            ADJUSTED_BASIC,
        )

        assert result.total == Decimal("5436.36")
