"""Proration of salary components by payable days."""

from __future__ import annotations

from decimal import Decimal

from hrms_payroll.calculators.period import WORKING_DAYS_PER_WEEK
from hrms_payroll.calculators.rounding import round_to_cents
from hrms_payroll.calculators.types import (
    SALARY_COMPONENTS,
    ZERO,
    DayClassification,
    ProrationResult,
    SalaryComponents,
    WorkedDaysBreakdown,
)


class ProrationEngine:
    """Scales every gross component by payable days over working days.

    - total_payable_days = max(0, attendance + paid leave - unpaid leave)
    - daily_wage_rate = monthly_wage / total_working_days, to cents
    - day amounts = daily_wage_rate x days, to cents
    - each component = component x payable_days / working_days, to cents

    The ratio itself is never rounded before it is applied.
    """

    @staticmethod
    def payable_days(classification: DayClassification) -> int:
        return max(
            0,
            classification.attendance_days
            + classification.paid_time_off_days
            - classification.unpaid_time_off_days,
        )

    def prorate(
        self,
        monthly_wage: Decimal,
        components: SalaryComponents,
        classification: DayClassification,
        total_working_days: int,
    ) -> ProrationResult:
        if total_working_days <= 0:
            raise ValueError("total_working_days must be positive")

        working_days = Decimal(total_working_days)
        payable_days = self.payable_days(classification)

        daily_wage_rate = round_to_cents(monthly_wage / working_days)
        attendance_amount = round_to_cents(daily_wage_rate * classification.attendance_days)
        paid_amount = round_to_cents(daily_wage_rate * classification.paid_time_off_days)
        unpaid_amount = round_to_cents(daily_wage_rate * classification.unpaid_time_off_days)
        payable_amount = max(ZERO, attendance_amount + paid_amount - unpaid_amount)

        adjusted = SalaryComponents(
            **{
                name: round_to_cents(getattr(components, name) * payable_days / working_days)
                for name in SALARY_COMPONENTS
            }
        )

        worked_days = WorkedDaysBreakdown(
            attendance_days=classification.attendance_days,
            attendance_amount=attendance_amount,
            paid_time_off_days=classification.paid_time_off_days,
            paid_time_off_amount=paid_amount,
            unpaid_time_off_days=classification.unpaid_time_off_days,
            unpaid_time_off_amount=unpaid_amount,
            total_payable_days=payable_days,
            total_payable_amount=payable_amount,
            total_working_days=total_working_days,
            working_days_per_week=WORKING_DAYS_PER_WEEK,
        )

        return ProrationResult(
            daily_wage_rate=daily_wage_rate,
            payable_ratio=Decimal(payable_days) / working_days,
            worked_days=worked_days,
            adjusted=adjusted,
        )
