# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from .results import FormulaResult, ResultStatus

__version__ = "0.1.0"

MAX_ITERATION_COUNT = 20
ABSOLUTE_ACCURACY = 1e-7
DEFAULT_GUESS = 0.10


# =============================================================================
# Internal Rate of Return (IRR): Newton-Raphson on the zero-index NPV
# =============================================================================
#
# IRR discounts the first flow by ZERO periods (it is "today"):
#
#     f(r)  = Σₖ values[k] / (1+r)^k              k = 0 .. N-1
#     f'(r) = -Σₖ k · values[k] / (1+r)^(k+1)
#
# annuity.net_present_value uses the other spreadsheet convention (first flow
# discounted one period). The two are related by
#
#     net_present_value(r, values) == f(r) / (1+r)
#
# so both share the same roots for r != -1, but their values differ.
# =============================================================================

def _as_flows(cashflows: Sequence[float] | np.ndarray) -> list[float]:
    flows = np.asarray(cashflows, dtype=float)
    if flows.ndim != 1 or flows.size == 0:
        raise ValueError(f"cashflows must be a non-empty 1-D sequence, got shape {flows.shape}")
    return flows.tolist()


def net_present_value_at_zero_index(
        rate: float,
        cashflows: Sequence[float] | np.ndarray
) -> float:
    """
    Net present value with the first flow undiscounted.

    This is the function whose root internal_rate_of_return finds, so
    net_present_value_at_zero_index(irr, cashflows) ≈ 0 for a converged IRR.

    Raises:
        ValueError: If cashflows is empty or rate is -1
    """
    flows = np.asarray(_as_flows(cashflows))
    if rate == -1:
        raise ValueError("rate must not be -1, discount factor (1 + rate) is zero")
    discount = (1.0 + rate) ** np.arange(flows.size)
    return float(np.sum(flows / discount))


def internal_rate_of_return(
        cashflows: Sequence[float] | np.ndarray,
        guess: float = DEFAULT_GUESS
) -> FormulaResult:
    """
    Calculate the internal rate of return of a cash-flow series (IRR).

    ALGORITHM:
    ----------
    Newton-Raphson on f(r) = Σ values[k] / (1+r)^k:

        r₁ = r₀ - f(r₀) / f'(r₀)

    f and f' are accumulated in one pass over the series, sharing the running
    discount factor, so both are evaluated at exactly the same r₀.

    Iteration stops when |r₁ - r₀| ≤ ABSOLUTE_ACCURACY (1e-7) and returns r₁.
    There is no fallback solver. The three failure modes are reported as
    results, not raised:

        ZERO_DENOMINATOR  1 + r₀ == 0, or (1 + r₀)^k underflows to zero,
                          so the discount factor is undefined
        ZERO_DERIVATIVE   f'(r₀) == 0, the Newton step is undefined
        NOT_CONVERGED     MAX_ITERATION_COUNT (20) iterations used up, or
                          f, f' or r₁ is no longer finite (inf or nan)

    Series with no sign change (no real root) end in one of these. Series
    with several sign changes may have several roots; the one found depends
    on `guess`, and the caller may retry with a different guess.

    Args:
        cashflows: Signed amounts, cashflows[0] at the valuation date (undiscounted)
        guess: Starting rate for the iteration (default 0.10)

    Returns:
        FormulaResult with the periodic rate and the number of iterations used

    Raises:
        ValueError: If cashflows is empty

    Example:
        >>> result = internal_rate_of_return([-1000, 300, 400, 500, 600])
        >>> round(result.unwrap(), 4)
        0.2489
    """
    values = _as_flows(cashflows)
    x0 = float(guess)

    for iteration in range(1, MAX_ITERATION_COUNT + 1):
        factor = 1.0 + x0
        if factor == 0:
            return FormulaResult.failure(
                ResultStatus.ZERO_DENOMINATOR,
                f"discount factor 1 + rate is zero at rate {x0}",
                iterations=iteration,
            )

        f_value = values[0]
        f_derivative = 0.0
        denominator = factor
        for k, value in enumerate(values[1:], start=1):
            f_value += value / denominator
            denominator *= factor
            if denominator == 0:
                return FormulaResult.failure(
                    ResultStatus.ZERO_DENOMINATOR,
                    f"discount factor (1 + rate)^{k + 1} underflows to zero at rate {x0}",
                    iterations=iteration,
                )
            f_derivative -= k * value / denominator

        if not (math.isfinite(f_value) and math.isfinite(f_derivative)):
            return FormulaResult.failure(
                ResultStatus.NOT_CONVERGED,
                f"NPV or its derivative is not finite at rate {x0}",
                iterations=iteration,
            )
        if f_derivative == 0:
            return FormulaResult.failure(
                ResultStatus.ZERO_DERIVATIVE,
                f"NPV derivative is zero at rate {x0}",
                iterations=iteration,
            )

        x1 = x0 - f_value / f_derivative
        if not math.isfinite(x1):
            return FormulaResult.failure(
                ResultStatus.NOT_CONVERGED,
                f"Newton step from rate {x0} left the finite range",
                iterations=iteration,
            )
        if abs(x1 - x0) <= ABSOLUTE_ACCURACY:
            return FormulaResult.success(x1, iterations=iteration)
        x0 = x1

    return FormulaResult.failure(
        ResultStatus.NOT_CONVERGED,
        f"no convergence within {MAX_ITERATION_COUNT} iterations (last rate {x0})",
        iterations=MAX_ITERATION_COUNT,
    )
