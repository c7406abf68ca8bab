# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .annuity import _future_value, _interest_portion, _payment, _warn_zero_rate

__version__ = "0.1.0"


# =============================================================================
# Amortization Schedule: the period-by-period PMT / IPMT / PPMT table
# =============================================================================

@dataclass
class AmortizationSchedule:
    """
    Container for a level-payment amortization schedule.

    All arrays have one entry per payment period (period[0] == 1). Amounts
    follow the spreadsheet sign convention: for a loan with pv > 0, payment,
    interest and principal are negative and the balances are positive.

    - opening_balance: balance carried into the period (pv for period 1)
    - closing_balance: balance after the period, -FV(rate, period, PMT, pv)
    - payment == interest + principal in every period
    """
    period: np.ndarray
    payment: np.ndarray
    interest: np.ndarray
    principal: np.ndarray
    opening_balance: np.ndarray
    closing_balance: np.ndarray

    @property
    def total_interest(self) -> float:
        return float(np.sum(self.interest))

    @property
    def total_principal(self) -> float:
        return float(np.sum(self.principal))


def amortization_schedule(
    rate: float,
    nper: int,
    pv: float,
    fv: float = 0.0,
    due_at_start: bool = False
) -> AmortizationSchedule:
    """
    Build the full amortization schedule for a level-payment loan or annuity.

    Each row is computed independently from the closed-form formulas rather
    than rolled forward, so no rounding drift accumulates over long terms:

        payment[k]         = PMT(rate, nper, pv, fv)
        interest[k]        = IPMT(rate, k, nper, pv, fv)
        principal[k]       = PPMT(rate, k, nper, pv, fv)
        closing_balance[k] = -FV(rate, k, PMT, pv)

    For payments due at period end the balances also satisfy the roll-forward

        closing_balance[k] = opening_balance[k] + principal[k]

    and closing_balance[-1] == -fv.

    Args:
        rate: Periodic interest rate as decimal
        nper: Number of payment periods (positive integer)
        pv: Present value (principal borrowed is positive)
        fv: Future value after the last payment (default 0.0)
        due_at_start: True if payments are due at the beginning of each period

    Returns:
        AmortizationSchedule with nper rows

    Raises:
        ValueError: If nper is not a positive integer
        Warning: If rate is zero (emitted once per schedule)
    """
    if int(nper) != nper or nper <= 0:
        raise ValueError(f"nper must be a positive integer, got {nper}")
    nper = int(nper)

    level_payment = _payment(rate, nper, pv, fv, due_at_start)
    if rate == 0:
        _warn_zero_rate("schedule")

    period = np.arange(1, nper + 1)
    payments = np.full(nper, level_payment)
    interest = np.zeros(nper)
    principal = np.zeros(nper)
    opening_balance = np.zeros(nper)
    closing_balance = np.zeros(nper)

    for i, per in enumerate(period):
        per = int(per)
        interest[i] = _interest_portion(rate, per, nper, pv, fv, due_at_start)
        principal[i] = level_payment - interest[i]
        opening_balance[i] = pv if i == 0 else closing_balance[i - 1]
        closing_balance[i] = -_future_value(rate, per, level_payment, pv, due_at_start)

    return AmortizationSchedule(
        period=period,
        payment=payments,
        interest=interest,
        principal=principal,
        opening_balance=opening_balance,
        closing_balance=closing_balance,
    )
