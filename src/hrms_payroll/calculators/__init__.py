"""Payroll calculation engine."""

from hrms_payroll.calculators.day_classifier import classify_days
from hrms_payroll.calculators.deductions import DeductionCalculator
from hrms_payroll.calculators.engine import PayrollEngine
from hrms_payroll.calculators.period import InvalidPeriodError, resolve_period
from hrms_payroll.calculators.proration import ProrationEngine
from hrms_payroll.calculators.salary_resolver import (
    MissingSalaryInfoError,
    SalaryStructureResolver,
)

__all__ = [
    "DeductionCalculator",
    "InvalidPeriodError",
    "MissingSalaryInfoError",
    "PayrollEngine",
    "ProrationEngine",
    "SalaryStructureResolver",
    "classify_days",
    "resolve_period",
]
