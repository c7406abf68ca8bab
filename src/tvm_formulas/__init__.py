# Requires Python 3.12+
"""
TVM Formulas — spreadsheet-compatible time-value-of-money functions.

Closed-form PMT, IPMT, PPMT, FV, PV, NPV and NPER, plus a Newton-Raphson IRR.
"""

from __future__ import annotations

__version__ = "0.1.0"

# Result type and failure reporting
from tvm_formulas.results import (
    ResultStatus,
    FormulaResult,
    DomainError,
    ZeroRateWarning,
)

# Annuity formulas (closed form)
from tvm_formulas.annuity import (
    payment,
    interest_portion,
    principal_portion,
    future_value,
    present_value,
    net_present_value,
    period_count,
)

# Root-finder
from tvm_formulas.irr import (
    internal_rate_of_return,
    net_present_value_at_zero_index,
    MAX_ITERATION_COUNT,
    ABSOLUTE_ACCURACY,
    DEFAULT_GUESS,
)

# Amortization schedule
from tvm_formulas.schedule import (
    AmortizationSchedule,
    amortization_schedule,
)

__all__ = [
    "__version__",
    # Results
    "ResultStatus",
    "FormulaResult",
    "DomainError",
    "ZeroRateWarning",
    # Annuity formulas
    "payment",
    "interest_portion",
    "principal_portion",
    "future_value",
    "present_value",
    "net_present_value",
    "period_count",
    # Root-finder
    "internal_rate_of_return",
    "net_present_value_at_zero_index",
    "MAX_ITERATION_COUNT",
    "ABSOLUTE_ACCURACY",
    "DEFAULT_GUESS",
    # Schedule
    "AmortizationSchedule",
    "amortization_schedule",
]
