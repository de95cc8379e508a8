"""
Module: hr_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    calculation engines.  This is the canonical import surface for
    ``hr_modules`` and ``hr_config``.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import ``hr_kernel`` (clock, logging, exceptions).
    MUST NOT import ``hr_modules`` or ``hr_config``.

Invariants enforced:
    - Engines NEVER call ``datetime.now()`` or ``date.today()``; "now" is
      a parameter or comes from an injected ``Clock``.
    - Decimal-only arithmetic for money, with no rounding.
    - Identical inputs always produce identical outputs.
"""

from hr_engines.dates import MonthCounting, add_months, add_years, months_between
from hr_engines.depreciation import (
    TRAINING_DEBT_SCHEDULE,
    UNIFORM_SCHEDULE,
    BenefitDepreciationEngine,
    BenefitItem,
    BenefitValuation,
    DepreciationSchedule,
    TierStep,
)
from hr_engines.payroll import (
    PayrollAggregator,
    PayrollBreakdown,
    PayrollTotals,
    SalaryComponents,
)

__all__ = [
    # Dates
    "MonthCounting",
    "add_months",
    "add_years",
    "months_between",
    # Depreciation
    "BenefitDepreciationEngine",
    "BenefitItem",
    "BenefitValuation",
    "DepreciationSchedule",
    "TierStep",
    "TRAINING_DEBT_SCHEDULE",
    "UNIFORM_SCHEDULE",
    # Payroll
    "PayrollAggregator",
    "PayrollBreakdown",
    "PayrollTotals",
    "SalaryComponents",
]
