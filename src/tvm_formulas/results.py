# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

__version__ = "0.1.0"


# =============================================================================
# Failure Reporting
# =============================================================================
#
# Three ways a call can go wrong, each reported differently:
#
#   1. Caller input errors (empty cash-flow series, zero periods, ...)
#      -> ValueError, raised immediately.
#   2. Degenerate-but-valid input (zero rate)
#      -> ZeroRateWarning, the closed-form fallback is returned.
#   3. Mathematical failure (IRR does not converge, NPER has no real solution)
#      -> FormulaResult with a non-OK status. Spreadsheets report these as
#         #NUM!; here the caller inspects the result and decides.
# =============================================================================

class ResultStatus(Enum):
    """Outcome of a computation that can fail mathematically."""
    OK = "ok"
    DOMAIN_ERROR = "domain_error"          # log/power argument out of domain
    ZERO_DENOMINATOR = "zero_denominator"  # 1 + rate == 0 during iteration
    ZERO_DERIVATIVE = "zero_derivative"    # stationary point, Newton step undefined
    NOT_CONVERGED = "not_converged"        # iteration cap reached


class DomainError(ArithmeticError):
    """Raised by FormulaResult.unwrap() when the result is a failure."""

    def __init__(self, status: ResultStatus, message: str = ""):
        super().__init__(message or status.value)
        self.status = status


class ZeroRateWarning(UserWarning):
    """A formula fell back to its zero-rate (linear, no compounding) branch."""


@dataclass(frozen=True)
class FormulaResult:
    """
    Success-or-failure container for PERIOD_COUNT and IRR.

    A failed result carries value = nan so that float(result) behaves like the
    spreadsheet sentinel, but callers are expected to check `ok` (or call
    unwrap()) rather than let nan flow into further arithmetic.

    Fields:
        value: The computed quantity, nan on failure
        status: ResultStatus.OK or the failure reason
        iterations: Newton-Raphson iterations used (0 for closed-form results)
        message: Human-readable failure description (empty on success)

    Example:
        >>> result = internal_rate_of_return([-1000, 300, 400, 500, 600])
        >>> result.ok
        True
        >>> rate = result.unwrap()
    """
    value: float
    status: ResultStatus = ResultStatus.OK
    iterations: int = 0
    message: str = ""

    @classmethod
    def success(cls, value: float, iterations: int = 0) -> FormulaResult:
        return cls(value=float(value), status=ResultStatus.OK, iterations=iterations)

    @classmethod
    def failure(cls, status: ResultStatus, message: str, iterations: int = 0) -> FormulaResult:
        if status is ResultStatus.OK:
            raise ValueError("failure() requires a non-OK status")
        return cls(value=math.nan, status=status, iterations=iterations, message=message)

    @property
    def ok(self) -> bool:
        return self.status is ResultStatus.OK

    def unwrap(self) -> float:
        """Return the value, or raise DomainError if the computation failed."""
        if not self.ok:
            raise DomainError(self.status, self.message)
        return self.value

    def value_or(self, default: float) -> float:
        return self.value if self.ok else default

    def __float__(self) -> float:
        return self.value if self.ok else math.nan
