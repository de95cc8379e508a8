"""
Uniform Domain Models (``hr_modules.uniforms.models``).

Responsibility
--------------
Frozen dataclass value objects for issued uniform items and the uniform
report.  A uniform item is a benefit whose value decays quarterly over
its first year (see ``hr_engines.depreciation.UNIFORM_SCHEDULE``).

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.

Invariants enforced
-------------------
* All models are ``frozen=True``.
* All monetary fields use ``Decimal`` and are non-negative.
* ``quantity`` is at least 1.
* Current value and tier are never stored on the item.

Failure modes
-------------
* ``NegativeAmountError`` / ``InvalidQuantityError`` /
  ``InvalidRecordError`` on construction with invalid fields.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from uuid import UUID

from hr_engines.depreciation import BenefitItem
from hr_kernel.logging_config import get_logger
from hr_modules._validation import require_text, to_amount, to_date, to_quantity

logger = get_logger("modules.uniforms.models")

_RECORD = "UniformItem"


@dataclass(frozen=True)
class UniformItem:
    """A uniform item handed to an employee."""

    id: UUID
    employee_id: str
    item_type: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal
    delivery_date: date
    notes: str | None = None

    def __post_init__(self):
        object.__setattr__(self, "employee_id", require_text(_RECORD, "employee_id", self.employee_id))
        object.__setattr__(self, "item_type", require_text(_RECORD, "item_type", self.item_type))
        object.__setattr__(self, "quantity", to_quantity(self.quantity))
        object.__setattr__(self, "unit_price", to_amount(_RECORD, "unit_price", self.unit_price))
        object.__setattr__(self, "total_price", to_amount(_RECORD, "total_price", self.total_price))
        object.__setattr__(self, "delivery_date", to_date(_RECORD, "delivery_date", self.delivery_date))

    def as_benefit(self) -> BenefitItem:
        """Project onto the engine's benefit record."""
        return BenefitItem(
            issued_on=self.delivery_date,
            original_value=self.total_price,
            owner_id=self.employee_id,
            reference=str(self.id),
        )


@dataclass(frozen=True)
class UniformEmployeeSummary:
    """Per-employee uniform totals."""
    employee_id: str
    quantity: int
    original_value: Decimal
    current_value: Decimal

    @property
    def depreciation(self) -> Decimal:
        return self.original_value - self.current_value


@dataclass(frozen=True)
class UniformTypeSummary:
    """Per-type uniform totals."""
    item_type: str
    quantity: int
    original_value: Decimal


@dataclass(frozen=True)
class UniformReport:
    """
    Comprehensive uniform report at a reference date.

    Guarantees
    ----------
    * ``total_current`` is the sum of per-item current values (no rounding).
    * ``tier_distribution`` maps tier percent to item count and only
      contains tiers that occur, highest tier first.
    * Expired items are included; this is the audit view.
    """

    as_of: date
    item_count: int
    total_quantity: int
    total_original: Decimal
    total_current: Decimal
    employee_count: int
    by_employee: tuple[UniformEmployeeSummary, ...] = ()
    by_type: tuple[UniformTypeSummary, ...] = ()
    tier_distribution: dict[int, int] = field(default_factory=dict)

    @property
    def total_depreciation(self) -> Decimal:
        return self.total_original - self.total_current
