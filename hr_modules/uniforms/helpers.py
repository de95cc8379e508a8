"""
Uniform Helpers (``hr_modules.uniforms.helpers``).

Pure aggregation of uniform items into a ``UniformReport``.  No I/O, no
session, no clock: the reference date is passed in.  Per-item values come
from ``BenefitDepreciationEngine`` so report totals always equal the sum
of the values shown per item.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from hr_engines.depreciation import (
    UNIFORM_SCHEDULE,
    BenefitDepreciationEngine,
    DepreciationSchedule,
)
from hr_modules.uniforms.models import (
    UniformEmployeeSummary,
    UniformItem,
    UniformReport,
    UniformTypeSummary,
)


def build_uniform_report(
    items: Sequence[UniformItem],
    engine: BenefitDepreciationEngine,
    as_of: date,
    schedule: DepreciationSchedule = UNIFORM_SCHEDULE,
) -> UniformReport:
    """
    Aggregate uniform items at ``as_of``.

    Postconditions:
        - Employees and types appear in first-seen order.
        - An empty item list yields zero totals and empty breakdowns.
    """
    employees: dict[str, dict] = {}
    types: dict[str, dict] = {}
    tiers = {percent: 0 for percent in schedule.possible_percents}
    total_original = Decimal("0")
    total_current = Decimal("0")
    total_quantity = 0

    for item in items:
        valuation = engine.valuate(item.as_benefit(), now=as_of, schedule=schedule)
        total_quantity += item.quantity
        total_original += item.total_price
        total_current += valuation.current_value
        tiers[valuation.tier_percent] += 1

        emp = employees.setdefault(
            item.employee_id,
            {"quantity": 0, "original": Decimal("0"), "current": Decimal("0")},
        )
        emp["quantity"] += item.quantity
        emp["original"] += item.total_price
        emp["current"] += valuation.current_value

        kind = types.setdefault(item.item_type, {"quantity": 0, "original": Decimal("0")})
        kind["quantity"] += item.quantity
        kind["original"] += item.total_price

    return UniformReport(
        as_of=as_of,
        item_count=len(items),
        total_quantity=total_quantity,
        total_original=total_original,
        total_current=total_current,
        employee_count=len(employees),
        by_employee=tuple(
            UniformEmployeeSummary(
                employee_id=employee_id,
                quantity=data["quantity"],
                original_value=data["original"],
                current_value=data["current"],
            )
            for employee_id, data in employees.items()
        ),
        by_type=tuple(
            UniformTypeSummary(
                item_type=item_type,
                quantity=data["quantity"],
                original_value=data["original"],
            )
            for item_type, data in types.items()
        ),
        tier_distribution={p: n for p, n in tiers.items() if n > 0},
    )
