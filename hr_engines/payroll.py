"""
Module: hr_engines.payroll
Responsibility:
    Derive earnings totals from an employee-year's stored salary
    components and aggregate them for reporting.

Architecture position:
    Engines -- pure calculation layer, zero I/O, no clock.

Invariants enforced:
    - ``gross`` excludes the living allowance; it is paid monthly and must
      not be double-counted in this aggregate.
    - ``full_gross`` is ``gross + living_allowance``.
    - ``net`` is ``full_gross - employee_insurance``.  Employer social
      insurance, health insurance and income tax are reporting-only and
      are NOT subtracted.
    - Derived totals are never stored; they are recomputed from components.
    - Decimal-only arithmetic, no rounding.

Failure modes:
    - None for numeric inputs.  Negative components are not rejected here;
      ``hr_modules.salary.models`` validates at the boundary.

Usage:
    from hr_engines.payroll import PayrollAggregator, SalaryComponents

    aggregator = PayrollAggregator()
    aggregator.net(components)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, fields
from decimal import Decimal

from hr_kernel.logging_config import get_logger
from hr_engines.tracer import traced_engine

logger = get_logger("engines.payroll")

_ZERO = Decimal("0")


@dataclass(frozen=True)
class SalaryComponents:
    """Named salary components for one employee-year."""

    # Earnings
    basic_salary: Decimal = _ZERO
    transport_allowance: Decimal = _ZERO
    incentives: Decimal = _ZERO
    living_allowance: Decimal = _ZERO
    station_allowance: Decimal = _ZERO
    mobile_allowance: Decimal = _ZERO
    # Deductions / contributions
    employee_insurance: Decimal = _ZERO
    employer_social_insurance: Decimal = _ZERO
    health_insurance: Decimal = _ZERO
    income_tax: Decimal = _ZERO

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def as_dict(self) -> dict[str, Decimal]:
        return {name: getattr(self, name) for name in self.field_names()}


@dataclass(frozen=True)
class PayrollBreakdown:
    """All derived totals for one set of components."""

    gross: Decimal
    full_gross: Decimal
    net: Decimal
    employee_insurance: Decimal
    employer_social_insurance: Decimal
    health_insurance: Decimal
    income_tax: Decimal


@dataclass(frozen=True)
class PayrollTotals:
    """
    Sums across many employee-year records.

    Guarantees:
        - Each total equals the sum of the per-record values.
    """

    headcount: int = 0
    gross: Decimal = _ZERO
    full_gross: Decimal = _ZERO
    net: Decimal = _ZERO
    living_allowance: Decimal = _ZERO
    employee_insurance: Decimal = _ZERO
    employer_social_insurance: Decimal = _ZERO
    health_insurance: Decimal = _ZERO
    income_tax: Decimal = _ZERO

    @property
    def total_insurance(self) -> Decimal:
        """Employee, employer social and health insurance combined."""
        return (
            self.employee_insurance
            + self.employer_social_insurance
            + self.health_insurance
        )

    def add(self, breakdown: PayrollBreakdown, living_allowance: Decimal) -> PayrollTotals:
        return PayrollTotals(
            headcount=self.headcount + 1,
            gross=self.gross + breakdown.gross,
            full_gross=self.full_gross + breakdown.full_gross,
            net=self.net + breakdown.net,
            living_allowance=self.living_allowance + living_allowance,
            employee_insurance=self.employee_insurance + breakdown.employee_insurance,
            employer_social_insurance=(
                self.employer_social_insurance + breakdown.employer_social_insurance
            ),
            health_insurance=self.health_insurance + breakdown.health_insurance,
            income_tax=self.income_tax + breakdown.income_tax,
        )


class PayrollAggregator:
    """
    Stateless payroll derivation.

    Contract:
        Pure and total over numeric components.  The three earnings
        formulas are kept distinct on purpose; callers pick the one that
        matches their view.
    """

    def gross(self, components: SalaryComponents) -> Decimal:
        """Basic + transport + incentives + station + mobile (no living allowance)."""
        return (
            components.basic_salary
            + components.transport_allowance
            + components.incentives
            + components.station_allowance
            + components.mobile_allowance
        )

    def full_gross(self, components: SalaryComponents) -> Decimal:
        """Gross including the living allowance, for record-level display."""
        return self.gross(components) + components.living_allowance

    def net(self, components: SalaryComponents) -> Decimal:
        """Full gross less the employee's own insurance contribution only."""
        return self.full_gross(components) - components.employee_insurance

    def breakdown(self, components: SalaryComponents) -> PayrollBreakdown:
        gross = self.gross(components)
        full_gross = gross + components.living_allowance
        return PayrollBreakdown(
            gross=gross,
            full_gross=full_gross,
            net=full_gross - components.employee_insurance,
            employee_insurance=components.employee_insurance,
            employer_social_insurance=components.employer_social_insurance,
            health_insurance=components.health_insurance,
            income_tax=components.income_tax,
        )

    @traced_engine("payroll_aggregator", "1.0")
    def summarize(self, records: Iterable[SalaryComponents]) -> PayrollTotals:
        """Totals across records, including insurance and tax for reporting."""
        totals = PayrollTotals()
        for components in records:
            totals = totals.add(self.breakdown(components), components.living_allowance)
        return totals

    @traced_engine("payroll_aggregator", "1.0")
    def summarize_by(
        self, keyed_records: Iterable[tuple[str, SalaryComponents]]
    ) -> dict[str, PayrollTotals]:
        """Totals per group key (e.g. station location), in first-seen order."""
        groups: dict[str, PayrollTotals] = {}
        for key, components in keyed_records:
            current = groups.get(key, PayrollTotals())
            groups[key] = current.add(
                self.breakdown(components), components.living_allowance
            )
        logger.debug("payroll_groups_summarized", extra={"groups": len(groups)})
        return groups
