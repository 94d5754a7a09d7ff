"""Payroll record lifecycle with transition validation."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from hrms_payroll.config import RECOMPUTE_PRESERVE, RECOMPUTE_REJECT

if TYPE_CHECKING:
    from hrms_payroll.models import Payroll


class PayrollStatus(str, Enum):
    """Stored payroll status values."""

    PENDING = "Pending"
    PROCESSED = "Processed"


class PayrollState(str, Enum):
    """Lifecycle state of a (employee, month, year) payroll key."""

    ABSENT = "absent"
    PROCESSED = "processed"
    VALIDATED = "validated"


class PayrollAction(str, Enum):
    """Operations that move a payroll between states."""

    GENERATE = "generate"
    VALIDATE = "validate"


class InvalidTransitionError(Exception):
    """Raised when an action is not allowed in the current state."""

    def __init__(self, state: str, action: str, reason: str | None = None):
        self.state = state
        self.action = action
        self.reason = reason
        msg = f"Cannot {action} a payroll in state '{state}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class PayrollLockedError(InvalidTransitionError):
    """Raised when regenerating a validated payroll under the reject policy."""

    def __init__(self, payroll_id: int):
        self.payroll_id = payroll_id
        super().__init__(
            PayrollState.VALIDATED.value,
            PayrollAction.GENERATE.value,
            f"payroll {payroll_id} is validated and recompute policy is '{RECOMPUTE_REJECT}'",
        )


class PayrollStateMachine:
    """State machine for payroll records.

    Allowed transitions:
    - absent → processed (generate creates the record)
    - processed → processed (generate recomputes in place)
    - processed → validated (validate)
    - validated → validated (validate is idempotent; generate recomputes in
      place under the ``preserve`` policy and keeps the flag)

    Under the ``reject`` policy, generate on a validated payroll is refused.
    """

    VALID_TRANSITIONS: dict[tuple[str, str], str] = {
        (PayrollState.ABSENT, PayrollAction.GENERATE): PayrollState.PROCESSED,
        (PayrollState.PROCESSED, PayrollAction.GENERATE): PayrollState.PROCESSED,
        (PayrollState.PROCESSED, PayrollAction.VALIDATE): PayrollState.VALIDATED,
        (PayrollState.VALIDATED, PayrollAction.VALIDATE): PayrollState.VALIDATED,
        (PayrollState.VALIDATED, PayrollAction.GENERATE): PayrollState.VALIDATED,
    }

    def __init__(self, recompute_policy: str = RECOMPUTE_PRESERVE):
        if recompute_policy not in (RECOMPUTE_PRESERVE, RECOMPUTE_REJECT):
            raise ValueError(f"Unknown recompute policy '{recompute_policy}'")
        self.recompute_policy = recompute_policy

    @staticmethod
    def state_of(payroll: Payroll | None) -> PayrollState:
        """Derive the lifecycle state from a stored record."""
        if payroll is None:
            return PayrollState.ABSENT
        if payroll.is_validated:
            return PayrollState.VALIDATED
        return PayrollState.PROCESSED

    def can_apply(self, state: str, action: str) -> bool:
        """Check if an action is allowed in a state under the current policy."""
        if (state, action) not in self.VALID_TRANSITIONS:
            return False
        if state == PayrollState.VALIDATED and action == PayrollAction.GENERATE:
            return self.recompute_policy == RECOMPUTE_PRESERVE
        return True

    def apply(self, payroll: Payroll | None, action: str) -> PayrollState:
        """Validate an action against a record and return the resulting state.

        Raises:
            PayrollLockedError: Regenerating a validated payroll under ``reject``
            InvalidTransitionError: Any other disallowed action
        """
        state = self.state_of(payroll)
        if not self.can_apply(state, action):
            if payroll is not None and state == PayrollState.VALIDATED:
                raise PayrollLockedError(payroll.id)
            raise InvalidTransitionError(state.value, PayrollAction(action).value)
        return PayrollState(self.VALID_TRANSITIONS[(state, action)])
