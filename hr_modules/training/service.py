"""
Training Debt Service (``hr_modules.training.service``).

Responsibility
--------------
Records training-cost debts when an employee attends a paid course,
answers the active-debt views, and builds the training debt report.
Activity (debt still owed) is decided by ``BenefitDepreciationEngine``
with the training-debt schedule.

Invariants enforced
-------------------
* One debt per employee and course: recording again replaces the old
  debt within one transaction.
* A course with zero cost records no debt.
* Active totals equal the sum of per-debt current values.
* Each write method commits on success and rolls back on failure.

Failure modes
-------------
* ``ValidationError`` subclasses from DTO construction.
* ``TrainingDebtNotFoundError`` from ``get_debt``.
* Store errors propagate unchanged after rollback.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from hr_engines.depreciation import (
    TRAINING_DEBT_SCHEDULE,
    BenefitDepreciationEngine,
    DepreciationSchedule,
)
from hr_kernel.domain.clock import Clock, SystemClock
from hr_kernel.exceptions import TrainingDebtNotFoundError
from hr_kernel.logging_config import get_logger
from hr_modules.training.helpers import build_debt_report
from hr_modules.training.models import (
    DEFAULT_DEBT_TERM_YEARS,
    TrainingDebt,
    TrainingDebtReport,
)
from hr_modules.training.orm import TrainingDebtModel

logger = get_logger("modules.training.service")


class TrainingDebtService:
    """
    Training debt lifecycle.

    Guarantees
    ----------
    * Clock is injectable for deterministic testing.
    * Expired debts stay stored; they are only excluded from active views.
    """

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        engine: BenefitDepreciationEngine | None = None,
        schedule: DepreciationSchedule = TRAINING_DEBT_SCHEDULE,
        term_years: int = DEFAULT_DEBT_TERM_YEARS,
    ):
        self._session = session
        self._clock = clock or SystemClock()
        self._engine = engine or BenefitDepreciationEngine(clock=self._clock)
        self._schedule = schedule
        self._term_years = term_years

    def record_debt(
        self,
        employee_id: str,
        course_name: str,
        cost: Decimal,
        actual_date: date,
        actor_id: UUID | None = None,
    ) -> TrainingDebt | None:
        """
        Attribute a course cost to an employee from ``actual_date``.

        Returns None (and stores nothing) when the course is free.
        """
        debt = TrainingDebt(
            id=uuid4(),
            employee_id=employee_id,
            course_name=course_name,
            cost=cost,
            actual_date=actual_date,
            term_years=self._term_years,
        )
        if debt.cost == 0:
            logger.debug("training_debt_skipped_free_course", extra={
                "employee_id": debt.employee_id,
                "course_name": debt.course_name,
            })
            return None

        try:
            logger.info("training_debt_started", extra={
                "debt_id": str(debt.id),
                "employee_id": debt.employee_id,
                "course_name": debt.course_name,
                "cost": str(debt.cost),
            })
            existing = self._find(debt.employee_id, debt.course_name)
            if existing is not None:
                self._session.delete(existing)
                # the unique key must be free before the replacement is inserted
                self._session.flush()
            self._session.add(TrainingDebtModel.from_dto(debt, created_by_id=actor_id))
            self._session.commit()
            logger.info("training_debt_committed", extra={
                "debt_id": str(debt.id),
                "replaced": existing is not None,
            })
            return debt
        except Exception:
            self._session.rollback()
            logger.warning("training_debt_rolled_back", extra={"debt_id": str(debt.id)})
            raise

    def delete_debt(self, debt_id: UUID) -> bool:
        model = self._session.get(TrainingDebtModel, debt_id)
        if model is None:
            return False
        try:
            self._session.delete(model)
            self._session.commit()
            logger.info("training_debt_deleted", extra={"debt_id": str(debt_id)})
            return True
        except Exception:
            self._session.rollback()
            raise

    def get_debt(self, debt_id: UUID) -> TrainingDebt:
        model = self._session.get(TrainingDebtModel, debt_id)
        if model is None:
            raise TrainingDebtNotFoundError(debt_id)
        return model.to_dto(self._term_years)

    def list_debts(self, employee_id: str | None = None) -> list[TrainingDebt]:
        """Every stored debt, lapsed ones included."""
        stmt = select(TrainingDebtModel).order_by(
            TrainingDebtModel.actual_date, TrainingDebtModel.course_name
        )
        if employee_id is not None:
            stmt = stmt.where(TrainingDebtModel.employee_id == employee_id)
        return [m.to_dto(self._term_years) for m in self._session.scalars(stmt)]

    def get_active_debts(
        self, employee_id: str | None = None, as_of: date | None = None
    ) -> list[TrainingDebt]:
        as_of = as_of or self._clock.today()
        return [
            debt for debt in self.list_debts(employee_id)
            if not self._engine.is_expired(debt.actual_date, as_of, self._schedule)
        ]

    def total_active_debt(self, employee_id: str, as_of: date | None = None) -> Decimal:
        """Sum of current values of the employee's debts at ``as_of``."""
        as_of = as_of or self._clock.today()
        return sum(
            (
                self._engine.current_value(debt.cost, debt.actual_date, as_of, self._schedule)
                for debt in self.list_debts(employee_id)
            ),
            Decimal("0"),
        )

    def build_report(self, as_of: date | None = None) -> TrainingDebtReport:
        as_of = as_of or self._clock.today()
        report = build_debt_report(self.list_debts(), self._engine, as_of, self._schedule)
        logger.info("training_debt_report_built", extra={
            "as_of": as_of.isoformat(),
            "indebted_employees": report.indebted_employees,
            "total_debt": str(report.total_debt),
        })
        return report

    def _find(self, employee_id: str, course_name: str) -> TrainingDebtModel | None:
        stmt = select(TrainingDebtModel).where(
            TrainingDebtModel.employee_id == employee_id,
            TrainingDebtModel.course_name == course_name,
        )
        return self._session.scalars(stmt).one_or_none()
