# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
from __future__ import annotations

import math
import warnings
from collections.abc import Sequence

import numpy as np

from .results import FormulaResult, ResultStatus, ZeroRateWarning

__version__ = "0.1.0"


# =============================================================================
# Annuity Formulas: PMT, IPMT, PPMT, FV, PV, NPV, NPER
# =============================================================================
#
# All formulas share the spreadsheet time-value identity. With
#
#     r  = periodic rate (decimal, e.g. 0.05/12 for 5% annual paid monthly)
#     n  = number of periods
#     t  = 1 if payments are due at period START, 0 if due at period END
#
# the five quantities (pv, pmt, fv, r, n) balance when
#
#     pv·(1+r)ⁿ + pmt·(1 + r·t)·[(1+r)ⁿ - 1] / r + fv = 0
#
# Sign convention: money received is positive, money paid out is negative.
# A $200,000 loan (pv = +200000, cash received) has a negative payment.
#
# FUNCTION ARCHITECTURE:
#
#   future_value(r, n, pmt, pv)        identity solved for fv
#   present_value(r, n, pmt, fv)       identity solved for pv
#   payment(r, n, pv, fv)              identity solved for pmt
#   period_count(r, pmt, pv, fv)       identity solved for n (logarithms)
#   interest_portion(r, per, n, pv)    fv at per-1 (the running balance) × r
#   principal_portion(r, per, n, pv)   payment - interest_portion
#   net_present_value(r, cashflows)    discounted sum, first flow one period out
#
# Every closed-form branch divides by r, so each formula carries a zero-rate
# branch that reduces the identity to its linear form:
#
#     pv + pmt·n + fv = 0
# =============================================================================

def _timing_multiplier(rate: float, due_at_start: bool) -> float:
    """(1 + r) for payments at period start, 1 for payments at period end."""
    return 1.0 + rate if due_at_start else 1.0


def _growth(rate: float, nper: float) -> float:
    """(1 + r)ⁿ, inf rather than OverflowError when the power is out of range."""
    with np.errstate(over="ignore"):
        return float(np.power(1.0 + rate, nper))


def _warn_zero_rate(result: str) -> None:
    # stacklevel 3: the public formula's caller, not the formula itself
    warnings.warn(f"rate is zero, returning linear {result}", ZeroRateWarning, stacklevel=3)


# Unwarned forms, shared by the public formulas and the schedule so that one
# public call emits at most one ZeroRateWarning.

def _payment(rate, nper, pv, fv, due_at_start):
    if nper == 0:
        raise ValueError(f"nper must be non-zero, got {nper}")
    if rate == 0:
        return -(pv + fv) / nper
    growth = _growth(rate, nper)
    timing = 1 if due_at_start else 0
    return -rate * (pv * growth + fv) / ((1.0 + rate * timing) * (growth - 1.0))


def _future_value(rate, nper, pmt, pv, due_at_start):
    if rate == 0:
        return float(-(pv + nper * pmt))
    growth = _growth(rate, nper)
    return ((1.0 - growth) * _timing_multiplier(rate, due_at_start) * pmt) / rate - pv * growth


def _interest_portion(rate, per, nper, pv, fv, due_at_start):
    level_payment = _payment(rate, nper, pv, fv, due_at_start)
    interest = _future_value(rate, per - 1, level_payment, pv, due_at_start) * rate
    if due_at_start:
        interest /= (1.0 + rate)
    return interest


def payment(
        rate: float,
        nper: int,
        pv: float,
        fv: float = 0.0,
        due_at_start: bool = False
) -> float:
    """
    Calculate the level periodic payment that balances the time-value identity (PMT).

    FORMULA:
    --------
        PMT = -r · [pv·(1+r)ⁿ + fv] / { (1 + r·t) · [(1+r)ⁿ - 1] }

    Where t = 1 when payments are due at period start, else 0.

    This is the identity solved for pmt, so for the same arguments:

        future_value(r, n, payment(r, n, pv, fv, t), pv, t) == fv

    Zero rate: the identity is linear and PMT = -(pv + fv) / n.

    If (1+r)ⁿ overflows the float range it is taken as inf, and the result is
    nan or ±inf rather than an OverflowError.

    Args:
        rate: Periodic interest rate as decimal (e.g., 0.05/12 for 5% annual, monthly)
        nper: Total number of payment periods
        pv: Present value (principal borrowed is positive)
        fv: Future value remaining after the last payment (default 0.0)
        due_at_start: True if payments are due at the beginning of each period

    Returns:
        Periodic payment, opposite in sign to pv for a loan

    Raises:
        ValueError: If nper is zero
        Warning: If rate is zero

    Example (30-year mortgage, 5% annual, monthly, $200,000):
        >>> payment(0.05 / 12, 360, 200_000)
        -1073.6432...
    """
    result = _payment(rate, nper, pv, fv, due_at_start)
    if rate == 0:
        _warn_zero_rate("payment")
    return result


def interest_portion(
        rate: float,
        per: int,
        nper: int,
        pv: float,
        fv: float = 0.0,
        due_at_start: bool = False
) -> float:
    """
    Calculate the interest part of the payment made in period `per` (IPMT).

    The interest charged in period `per` is the rate applied to the balance
    carried into that period. That balance is the future value after per - 1
    level payments:

        IPMT(per) = FV(r, per-1, PMT, pv, t) · r

    When payments are due at period start, the payment for `per` is made
    before interest accrues on it, so the result is discounted by one period:

        IPMT(per) = FV(r, per-1, PMT, pv, t) · r / (1+r)

    Args:
        rate: Periodic interest rate as decimal
        per: Period (payment number, 1-indexed) to evaluate
        nper: Total number of payment periods
        pv: Present value
        fv: Future value after the last payment (default 0.0)
        due_at_start: True if payments are due at the beginning of each period

    Returns:
        Interest portion of the payment for period `per`

    Example (first month of the 30-year mortgage above):
        >>> interest_portion(0.05 / 12, 1, 360, 200_000)
        -833.3333...
    """
    interest = _interest_portion(rate, per, nper, pv, fv, due_at_start)
    if rate == 0:
        _warn_zero_rate("interest portion")
    return interest


def principal_portion(
        rate: float,
        per: int,
        nper: int,
        pv: float,
        fv: float = 0.0,
        due_at_start: bool = False
) -> float:
    """
    Calculate the principal part of the payment made in period `per` (PPMT).

    PPMT = PMT - IPMT, evaluated over the identical argument set so that
    payment == interest_portion + principal_portion holds exactly.
    """
    principal = (_payment(rate, nper, pv, fv, due_at_start)
                 - _interest_portion(rate, per, nper, pv, fv, due_at_start))
    if rate == 0:
        _warn_zero_rate("principal portion")
    return principal


def future_value(
        rate: float,
        nper: int,
        pmt: float,
        pv: float,
        due_at_start: bool = False
) -> float:
    """
    Calculate the value after `nper` periods of a present sum plus level payments (FV).

    FORMULA:
    --------
        FV = [1 - (1+r)ⁿ] · m · pmt / r  -  pv · (1+r)ⁿ

    Where m = (1+r) for payments at period start, else 1.

    Zero rate (mandatory, the general formula divides by r):

        FV = -(pv + n · pmt)

    If (1+r)ⁿ overflows the float range it is taken as inf, so the result
    is ±inf or nan rather than an OverflowError.

    Args:
        rate: Periodic interest rate as decimal
        nper: Number of periods
        pmt: Level payment per period
        pv: Present value
        due_at_start: True if payments are due at the beginning of each period

    Returns:
        Future value, in the spreadsheet sign convention

    Raises:
        Warning: If rate is zero

    Example:
        >>> future_value(0, 12, -100, 1000)
        200.0
    """
    result = _future_value(rate, nper, pmt, pv, due_at_start)
    if rate == 0:
        _warn_zero_rate("accumulation")
    return result


def present_value(
        rate: float,
        nper: int,
        pmt: float,
        fv: float,
        due_at_start: bool = False
) -> float:
    """
    Calculate today's value of level payments plus a future sum (PV).

    FORMULA:
    --------
        PV = { [1 - (1+r)ⁿ] / r · m · pmt  -  fv } / (1+r)ⁿ

    Zero rate:

        PV = -(n · pmt + fv)

    present_value and future_value are exact inverses in pv/fv for the same
    (rate, nper, pmt, due_at_start).
    """
    if rate == 0:
        _warn_zero_rate("accumulation")
        return float(-(nper * pmt + fv))
    growth = _growth(rate, nper)
    return (((1.0 - growth) / rate) * _timing_multiplier(rate, due_at_start) * pmt - fv) / growth


def net_present_value(
        rate: float,
        cashflows: Sequence[float] | np.ndarray
) -> float:
    """
    Calculate the net present value of a cash-flow series (NPV).

    FORMULA:
    --------
        NPV = Σᵢ cashflows[i] / (1+r)^(i+1)        i = 0 .. N-1

    Every flow sits at the END of its period, so the first flow is discounted
    by one full period. Note internal_rate_of_return uses the other convention
    (first flow undiscounted); see irr.net_present_value_at_zero_index.

    Args:
        rate: Periodic discount rate as decimal
        cashflows: Signed amounts, oldest first (income positive, payments negative)

    Returns:
        Net present value

    Raises:
        ValueError: If cashflows is empty or not one-dimensional
        ValueError: If rate is -1 (discount factor undefined)

    Example:
        >>> net_present_value(0.1, [100, 100, 100])
        248.6851...
    """
    flows = np.asarray(cashflows, dtype=float)
    if flows.ndim != 1 or flows.size == 0:
        raise ValueError(f"cashflows must be a non-empty 1-D sequence, got shape {flows.shape}")
    if rate == -1:
        raise ValueError("rate must not be -1, discount factor (1 + rate) is zero")
    discount = (1.0 + rate) ** np.arange(1, flows.size + 1)
    return float(np.sum(flows / discount))


def period_count(
        rate: float,
        pmt: float,
        pv: float,
        fv: float,
        due_at_start: bool = False
) -> FormulaResult:
    """
    Calculate the number of periods needed to move pv to fv with level payments (NPER).

    DERIVATION:
    -----------
    Let a = m · pmt / r (the payment stream capitalised as a perpetuity).
    The time-value identity rearranges to

        (1+r)ⁿ · (pv + a) = a - fv

    so

        n = [ln(a - fv) - ln(pv + a)] / ln(1+r)

    When a - fv < 0 both sides are negated before taking logarithms, i.e.
    ln(fv - a) and ln(-pv - a). Only magnitudes are logged; no complex branch
    is taken.

    If either logarithm argument is still non-positive after the sign
    correction there is no real n, and a DOMAIN_ERROR result is returned
    (spreadsheets show #NUM! here).

    Zero rate:

        n = -(fv + pv) / pmt

    Args:
        rate: Periodic interest rate as decimal
        pmt: Level payment per period
        pv: Present value
        fv: Target future value
        due_at_start: True if payments are due at the beginning of each period

    Returns:
        FormulaResult holding the (possibly fractional) number of periods

    Raises:
        ValueError: If rate is zero and pmt is zero
        Warning: If rate is zero

    Example:
        >>> period_count(0.05 / 12, -1073.64, 200_000, 0).unwrap()
        360.0...
    """
    if rate == 0:
        if pmt == 0:
            raise ValueError("pmt must be non-zero when rate is zero")
        _warn_zero_rate("period count")
        return FormulaResult.success(-(fv + pv) / pmt)

    annuity = _timing_multiplier(rate, due_at_start) * pmt / rate
    if (annuity - fv) < 0:
        numerator_arg, denominator_arg = fv - annuity, -pv - annuity
    else:
        numerator_arg, denominator_arg = annuity - fv, pv + annuity

    if numerator_arg <= 0 or denominator_arg <= 0 or (1.0 + rate) <= 0:
        return FormulaResult.failure(
            ResultStatus.DOMAIN_ERROR,
            f"no real period count: log arguments ({numerator_arg:.6g}, {denominator_arg:.6g}, "
            f"{1.0 + rate:.6g}) must all be positive",
        )
    periods = (math.log(numerator_arg) - math.log(denominator_arg)) / math.log(1.0 + rate)
    return FormulaResult.success(periods)
