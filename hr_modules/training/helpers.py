"""
Training Debt Helpers (``hr_modules.training.helpers``).

Pure aggregation of training debts into a ``TrainingDebtReport``.  The
reference date is a parameter; activity and amounts come from
``BenefitDepreciationEngine`` so report totals match per-debt figures.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from hr_engines.depreciation import (
    TRAINING_DEBT_SCHEDULE,
    BenefitDepreciationEngine,
    DepreciationSchedule,
)
from hr_modules.training.models import (
    EmployeeDebtSummary,
    ExpiryRange,
    TrainingDebt,
    TrainingDebtReport,
)

EXPIRY_RANGES: tuple[ExpiryRange, ...] = (
    ExpiryRange("< 6 months", 0, 6),
    ExpiryRange("6-12 months", 6, 12),
    ExpiryRange("1-2 years", 12, 24),
    ExpiryRange("2-3 years", 24, 36),
)


def build_debt_report(
    debts: Sequence[TrainingDebt],
    engine: BenefitDepreciationEngine,
    as_of: date,
    schedule: DepreciationSchedule = TRAINING_DEBT_SCHEDULE,
    ranges: tuple[ExpiryRange, ...] = EXPIRY_RANGES,
) -> TrainingDebtReport:
    """
    Group active debts by employee and bucket them by months to expiry.

    Postconditions:
        - Expired debts are excluded from every figure.
        - Months remaining = schedule horizon - months elapsed.
        - Only ranges with at least one debt are returned.
    """
    grouped: dict[str, list[TrainingDebt]] = {}
    totals: dict[str, Decimal] = {}
    remaining: list[int] = []

    for debt in debts:
        valuation = engine.valuate(debt.as_benefit(), now=as_of, schedule=schedule)
        if valuation.is_expired:
            continue
        grouped.setdefault(debt.employee_id, []).append(debt)
        totals[debt.employee_id] = (
            totals.get(debt.employee_id, Decimal("0")) + valuation.current_value
        )
        remaining.append(schedule.horizon_months - valuation.months_elapsed)

    by_employee = tuple(
        EmployeeDebtSummary(
            employee_id=employee_id,
            debts=tuple(employee_debts),
            total=totals[employee_id],
        )
        for employee_id, employee_debts in grouped.items()
    )

    distribution = []
    for r in ranges:
        count = sum(1 for months in remaining if r.min_months <= months < r.max_months)
        if count:
            distribution.append(
                ExpiryRange(r.label, r.min_months, r.max_months, count)
            )

    return TrainingDebtReport(
        as_of=as_of,
        by_employee=by_employee,
        total_debt=sum((s.total for s in by_employee), Decimal("0")),
        expiry_distribution=tuple(distribution),
    )
