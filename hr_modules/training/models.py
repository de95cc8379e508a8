"""
Training Debt Domain Models (``hr_modules.training.models``).

Responsibility
--------------
Frozen dataclass value objects for training-cost debts and the training
debt report.  A training debt is the cost of a course an employee owes
back if they leave within the debt term; it lapses automatically once
the term has run (see ``hr_engines.depreciation.TRAINING_DEBT_SCHEDULE``).

Invariants enforced
-------------------
* All models are ``frozen=True``.
* ``cost`` is a non-negative ``Decimal``.
* ``expiry_date`` is derived from ``actual_date``; it is informational,
  activity is decided by the schedule.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from uuid import UUID

from hr_engines.dates import add_years
from hr_engines.depreciation import BenefitItem
from hr_modules._validation import require_text, to_amount, to_date

_RECORD = "TrainingDebt"

DEFAULT_DEBT_TERM_YEARS = 3


@dataclass(frozen=True)
class TrainingDebt:
    """Course cost attributed to an employee from the course date."""

    id: UUID
    employee_id: str
    course_name: str
    cost: Decimal
    actual_date: date
    term_years: int = DEFAULT_DEBT_TERM_YEARS

    def __post_init__(self):
        object.__setattr__(self, "employee_id", require_text(_RECORD, "employee_id", self.employee_id))
        object.__setattr__(self, "course_name", require_text(_RECORD, "course_name", self.course_name))
        object.__setattr__(self, "cost", to_amount(_RECORD, "cost", self.cost))
        object.__setattr__(self, "actual_date", to_date(_RECORD, "actual_date", self.actual_date))

    @property
    def expiry_date(self) -> date:
        return add_years(self.actual_date, self.term_years)

    def as_benefit(self) -> BenefitItem:
        return BenefitItem(
            issued_on=self.actual_date,
            original_value=self.cost,
            owner_id=self.employee_id,
            reference=str(self.id),
        )


@dataclass(frozen=True)
class EmployeeDebtSummary:
    """Active debts owed by one employee."""
    employee_id: str
    debts: tuple[TrainingDebt, ...]
    total: Decimal

    @property
    def course_count(self) -> int:
        return len(self.debts)


@dataclass(frozen=True)
class ExpiryRange:
    """Debts whose remaining term falls in ``[min_months, max_months)``."""
    label: str
    min_months: int
    max_months: int
    count: int = 0


@dataclass(frozen=True)
class TrainingDebtReport:
    """
    Active training debts at a reference date.

    Guarantees
    ----------
    * Only active debts are included.
    * ``total_debt`` equals the sum of per-debt current values.
    * ``average_debt`` is not rounded; it is zero when nobody owes anything.
    """

    as_of: date
    by_employee: tuple[EmployeeDebtSummary, ...]
    total_debt: Decimal
    expiry_distribution: tuple[ExpiryRange, ...] = field(default_factory=tuple)

    @property
    def indebted_employees(self) -> int:
        return len(self.by_employee)

    @property
    def active_courses(self) -> int:
        return sum(s.course_count for s in self.by_employee)

    @property
    def average_debt(self) -> Decimal:
        if not self.by_employee:
            return Decimal("0")
        return self.total_debt / len(self.by_employee)
