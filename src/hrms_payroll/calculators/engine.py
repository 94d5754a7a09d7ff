"""Payroll calculation engine - pure composition of the calculators."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from hrms_payroll.calculators.day_classifier import classify_days
from hrms_payroll.calculators.deductions import (
    DEFAULT_PROFESSIONAL_TAX,
    DeductionCalculator,
)
from hrms_payroll.calculators.period import resolve_period
from hrms_payroll.calculators.proration import ProrationEngine
from hrms_payroll.calculators.salary_resolver import SalaryStructureResolver
from hrms_payroll.calculators.types import (
    AttendanceEntry,
    LeaveEntry,
    PayrollComputation,
    Period,
    SalaryStructure,
)


class PayrollEngine:
    """Computes one employee's payroll for one month.

    Calculation pipeline (stable order):
    1) Resolve the calendar period
    2) Classify weekdays into worked / paid leave / unpaid leave
    3) Resolve the salary structure into absolute components
    4) Prorate every component by payable days
    5) Compute deductions from the prorated basic

    The engine holds no state between calls and performs no I/O; the same
    inputs always produce the same computation.
    """

    def __init__(
        self,
        default_professional_tax: Decimal = DEFAULT_PROFESSIONAL_TAX,
        resolver: SalaryStructureResolver | None = None,
    ):
        self.resolver = resolver or SalaryStructureResolver()
        self.proration = ProrationEngine()
        self.deductions = DeductionCalculator(default_professional_tax)

    def compute(
        self,
        period: Period,
        structure: SalaryStructure | None,
        attendance: Iterable[AttendanceEntry],
        leaves: Iterable[LeaveEntry],
        employee_id: int | None = None,
    ) -> PayrollComputation:
        """Compute the payroll statement.

        Raises:
            MissingSalaryInfoError: If the structure is missing or has no
                positive monthly wage
        """
        wage = self.resolver.monthly_wage(structure, employee_id)
        classification = classify_days(period, attendance, leaves)
        resolved = self.resolver.resolve(structure, employee_id)
        proration = self.proration.prorate(
            wage, resolved, classification, period.total_working_days
        )
        deductions = self.deductions.calculate(
            structure,
            original_basic=resolved.basic_salary,
            adjusted_basic=proration.adjusted.basic_salary,
        )

        return PayrollComputation(
            period=period,
            classification=classification,
            resolved=resolved,
            proration=proration,
            deductions=deductions,
        )

    def compute_for_month(
        self,
        year: int,
        month: int,
        structure: SalaryStructure | None,
        attendance: Iterable[AttendanceEntry],
        leaves: Iterable[LeaveEntry],
        employee_id: int | None = None,
    ) -> PayrollComputation:
        """Resolve the period and compute."""
        period = resolve_period(year, month)
        return self.compute(period, structure, attendance, leaves, employee_id)
