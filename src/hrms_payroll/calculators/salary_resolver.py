"""Salary structure resolution into absolute component amounts."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from hrms_payroll.calculators.rounding import percent_of, round_to_cents, to_decimal
from hrms_payroll.calculators.types import (
    SALARY_COMPONENTS,
    ZERO,
    SalaryComponents,
    SalaryStructure,
)

MONTHLY_WAGE = "monthly_wage"


class MissingSalaryInfoError(Exception):
    """Raised when an employee has no usable salary structure."""

    def __init__(self, employee_id: int | None = None, reason: str | None = None):
        self.employee_id = employee_id
        self.reason = reason or "monthly wage is not set"
        subject = f"employee {employee_id}" if employee_id is not None else "employee"
        super().__init__(f"Missing salary info for {subject}: {self.reason}")


@dataclass(frozen=True)
class DerivationStep:
    """One component of the resolution pipeline.

    The stored amount wins when positive. Otherwise ``percentage_field`` of
    ``base`` applies, where base is the monthly wage or a component resolved
    by an earlier step. ``remainder`` steps with no amount and no percentage
    take whatever the wage leaves after every earlier component.
    """

    component: str
    percentage_field: str | None = None
    base: str | None = None
    remainder: bool = False


PIPELINE: tuple[DerivationStep, ...] = (
    DerivationStep("basic_salary", "basic_salary_percentage", MONTHLY_WAGE),
    DerivationStep("hra", "hra_percentage", "basic_salary"),
    DerivationStep("standard_allowance", "standard_allowance_percentage", MONTHLY_WAGE),
    DerivationStep("performance_bonus", "performance_bonus_percentage", "basic_salary"),
    DerivationStep(
        "leave_travel_allowance", "leave_travel_allowance_percentage", "basic_salary"
    ),
    DerivationStep("food_allowance"),
    DerivationStep(
        "fixed_allowance", "fixed_allowance_percentage", MONTHLY_WAGE, remainder=True
    ),
)


def _check_pipeline(steps: tuple[DerivationStep, ...]) -> None:
    """Every step may only read the wage or a component resolved before it."""
    seen: set[str] = set()
    for step in steps:
        if step.base is not None and step.base != MONTHLY_WAGE and step.base not in seen:
            raise ValueError(
                f"Step '{step.component}' depends on '{step.base}' "
                "which is not resolved before it"
            )
        seen.add(step.component)
    if tuple(step.component for step in steps) != SALARY_COMPONENTS:
        raise ValueError("Pipeline must resolve every salary component exactly once")


_check_pipeline(PIPELINE)


class SalaryStructureResolver:
    """Derives absolute monthly amounts for every salary component."""

    def __init__(self, pipeline: tuple[DerivationStep, ...] = PIPELINE):
        _check_pipeline(pipeline)
        self.pipeline = pipeline

    def resolve(
        self, structure: SalaryStructure | None, employee_id: int | None = None
    ) -> SalaryComponents:
        """Resolve every component of the structure.

        Raises:
            MissingSalaryInfoError: If there is no structure or the monthly
                wage is unset or not positive
        """
        wage = self.monthly_wage(structure, employee_id)
        resolved: dict[str, Decimal] = {MONTHLY_WAGE: wage}

        for step in self.pipeline:
            resolved[step.component] = self._derive(step, structure, resolved)

        return SalaryComponents(**{name: resolved[name] for name in SALARY_COMPONENTS})

    @staticmethod
    def monthly_wage(
        structure: SalaryStructure | None, employee_id: int | None = None
    ) -> Decimal:
        """Return the validated monthly wage."""
        if structure is None:
            raise MissingSalaryInfoError(employee_id, "no salary structure on record")
        wage = to_decimal(structure.monthly_wage)
        if structure.monthly_wage is None or wage <= 0:
            raise MissingSalaryInfoError(employee_id, "monthly wage must be greater than zero")
        return wage

    def _derive(
        self,
        step: DerivationStep,
        structure: SalaryStructure,
        resolved: dict[str, Decimal],
    ) -> Decimal:
        stored = to_decimal(getattr(structure, step.component))
        if stored > 0:
            return round_to_cents(stored)

        if step.percentage_field is None:
            return ZERO

        percentage = getattr(structure, step.percentage_field)
        if step.remainder and not to_decimal(percentage) > 0:
            return self._remainder(step, resolved)

        return percent_of(resolved[step.base], percentage)

    @staticmethod
    def _remainder(step: DerivationStep, resolved: dict[str, Decimal]) -> Decimal:
        earlier = SALARY_COMPONENTS[: SALARY_COMPONENTS.index(step.component)]
        allocated = sum((resolved[name] for name in earlier), ZERO)
        return max(ZERO, round_to_cents(resolved[MONTHLY_WAGE] - allocated))
