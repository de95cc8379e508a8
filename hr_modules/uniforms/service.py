"""
Uniform Module Service (``hr_modules.uniforms.service``).

Responsibility
--------------
Issues, corrects and deletes uniform items, and answers the two read
views: the active view (items not yet fully depreciated) and the audit
report (every item, with current values).  Depreciation itself is
delegated to ``BenefitDepreciationEngine``.

Architecture position
---------------------
**Modules layer** -- thin glue between the SQLAlchemy session and the
pure engine.  The engine never sees the session.

Invariants enforced
-------------------
* Each write method owns the transaction boundary (``commit`` on success,
  ``rollback`` and re-raise on any exception).
* Expiry never deletes rows; expired items are filtered out of the
  active view only.

Failure modes
-------------
* ``ValidationError`` subclasses from DTO construction.
* ``UniformNotFoundError`` for corrective edits of unknown items.
* Store errors propagate unchanged after rollback.

Usage::

    service = UniformService(session, clock=clock)
    item = service.issue_uniform(
        employee_id="Emp001", item_type="Navy Pants", quantity=2,
        unit_price=Decimal("350"), delivery_date=date(2024, 1, 15),
    )
    service.get_employee_uniforms("Emp001")
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from hr_engines.depreciation import (
    UNIFORM_SCHEDULE,
    BenefitDepreciationEngine,
    BenefitValuation,
    DepreciationSchedule,
)
from hr_kernel.domain.clock import Clock, SystemClock
from hr_kernel.exceptions import UniformNotFoundError
from hr_kernel.logging_config import get_logger
from hr_modules._validation import to_amount, to_quantity
from hr_modules.uniforms.helpers import build_uniform_report
from hr_modules.uniforms.models import UniformItem, UniformReport
from hr_modules.uniforms.orm import UniformItemModel

logger = get_logger("modules.uniforms.service")

_EDITABLE_FIELDS = frozenset({
    "employee_id",
    "item_type",
    "quantity",
    "unit_price",
    "total_price",
    "delivery_date",
    "notes",
})


class UniformService:
    """
    Uniform issuance and valuation.

    Guarantees
    ----------
    * Session is committed after every successful write, rolled back on
      failure.
    * Clock is injectable for deterministic testing.
    """

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        engine: BenefitDepreciationEngine | None = None,
        schedule: DepreciationSchedule = UNIFORM_SCHEDULE,
    ):
        self._session = session
        self._clock = clock or SystemClock()
        self._engine = engine or BenefitDepreciationEngine(clock=self._clock)
        self._schedule = schedule

    # =========================================================================
    # Writes
    # =========================================================================

    def issue_uniform(
        self,
        employee_id: str,
        item_type: str,
        quantity: int,
        unit_price: Decimal,
        delivery_date: date,
        total_price: Decimal | None = None,
        notes: str | None = None,
        actor_id: UUID | None = None,
    ) -> UniformItem:
        """
        Record a uniform handed to an employee.

        ``total_price`` defaults to ``quantity * unit_price``.
        """
        if total_price is None:
            total_price = to_quantity(quantity) * to_amount("UniformItem", "unit_price", unit_price)
        item = UniformItem(
            id=uuid4(),
            employee_id=employee_id,
            item_type=item_type,
            quantity=quantity,
            unit_price=unit_price,
            total_price=total_price,
            delivery_date=delivery_date,
            notes=notes,
        )
        try:
            logger.info("uniform_issue_started", extra={
                "item_id": str(item.id),
                "employee_id": item.employee_id,
                "item_type": item.item_type,
                "total_price": str(item.total_price),
            })
            self._session.add(UniformItemModel.from_dto(item, created_by_id=actor_id))
            self._session.commit()
            logger.info("uniform_issue_committed", extra={"item_id": str(item.id)})
            return item
        except Exception:
            self._session.rollback()
            logger.warning("uniform_issue_rolled_back", extra={"item_id": str(item.id)})
            raise

    def update_uniform(
        self,
        item_id: UUID,
        actor_id: UUID | None = None,
        **changes: Any,
    ) -> UniformItem:
        """
        Corrective edit of an issued item.

        Only fields of ``UniformItem`` other than ``id`` may change.  The
        edited item is re-validated before it is stored.
        """
        unknown = set(changes) - _EDITABLE_FIELDS
        if unknown:
            raise TypeError(f"Unknown uniform fields: {sorted(unknown)}")

        model = self._session.get(UniformItemModel, item_id)
        if model is None:
            raise UniformNotFoundError(item_id)

        updated = replace(model.to_dto(), **changes)
        try:
            logger.info("uniform_update_started", extra={
                "item_id": str(item_id),
                "fields": sorted(changes),
            })
            model.apply_dto(updated, updated_by_id=actor_id)
            self._session.commit()
            logger.info("uniform_update_committed", extra={"item_id": str(item_id)})
            return updated
        except Exception:
            self._session.rollback()
            logger.warning("uniform_update_rolled_back", extra={"item_id": str(item_id)})
            raise

    def delete_uniform(self, item_id: UUID) -> bool:
        """Delete an item.  Returns False when nothing matched."""
        model = self._session.get(UniformItemModel, item_id)
        if model is None:
            return False
        try:
            self._session.delete(model)
            self._session.commit()
            logger.info("uniform_deleted", extra={"item_id": str(item_id)})
            return True
        except Exception:
            self._session.rollback()
            logger.warning("uniform_delete_rolled_back", extra={"item_id": str(item_id)})
            raise

    # =========================================================================
    # Reads
    # =========================================================================

    def get_uniform(self, item_id: UUID) -> UniformItem:
        model = self._session.get(UniformItemModel, item_id)
        if model is None:
            raise UniformNotFoundError(item_id)
        return model.to_dto()

    def list_uniforms(self, employee_id: str | None = None) -> list[UniformItem]:
        """Every stored item, expired ones included, oldest delivery first."""
        stmt = select(UniformItemModel).order_by(
            UniformItemModel.delivery_date, UniformItemModel.created_at
        )
        if employee_id is not None:
            stmt = stmt.where(UniformItemModel.employee_id == employee_id)
        return [m.to_dto() for m in self._session.scalars(stmt)]

    def get_employee_uniforms(
        self, employee_id: str, as_of: date | None = None
    ) -> list[UniformItem]:
        """Active view: the employee's items that still carry value."""
        as_of = as_of or self._clock.today()
        return [
            item for item in self.list_uniforms(employee_id)
            if not self._engine.is_expired(item.delivery_date, as_of, self._schedule)
        ]

    def valuate_uniforms(
        self, employee_id: str, as_of: date | None = None
    ) -> list[tuple[UniformItem, BenefitValuation]]:
        """Active items paired with their valuation at ``as_of``."""
        as_of = as_of or self._clock.today()
        return [
            (item, self._engine.valuate(item.as_benefit(), now=as_of, schedule=self._schedule))
            for item in self.get_employee_uniforms(employee_id, as_of)
        ]

    def build_report(self, as_of: date | None = None) -> UniformReport:
        """Comprehensive report over all stored items."""
        as_of = as_of or self._clock.today()
        report = build_uniform_report(
            self.list_uniforms(), self._engine, as_of, self._schedule
        )
        logger.info("uniform_report_built", extra={
            "as_of": as_of.isoformat(),
            "item_count": report.item_count,
            "total_current": str(report.total_current),
        })
        return report
