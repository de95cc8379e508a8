"""
Salary Record Service (``hr_modules.salary.service``).

Responsibility
--------------
Stores one salary record per employee-year with upsert semantics and
serves payroll views derived by ``PayrollAggregator``: per-record
breakdowns and per-year / per-station summaries.

Invariants enforced
-------------------
* Upsert is a whole-record replace: saving an existing
  ``(employee_id, year)`` overwrites every component and the station.
  Last write wins; fields are never merged.
* Derived totals are computed on read, never stored.
* Each write method commits on success and rolls back on failure.

Failure modes
-------------
* ``ValidationError`` subclasses from ``SalaryRecord`` construction.
* Store errors (e.g. ``IntegrityError`` when a concurrent writer inserted
  the same key first) propagate unchanged after rollback.  No retry.

Usage::

    service = SalaryRecordService(session)
    service.save_record(SalaryRecord.from_fields("Emp001", 2026, basic_salary=8500))
    service.breakdown("Emp001", 2026).net
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from hr_engines.payroll import PayrollAggregator, PayrollBreakdown, PayrollTotals
from hr_kernel.logging_config import LogContext, get_logger
from hr_modules.salary.models import SalaryRecord
from hr_modules.salary.orm import SalaryRecordModel

logger = get_logger("modules.salary.service")


class SalaryRecordService:
    """
    Salary record store and payroll views.

    Non-goals
    ---------
    * Does NOT lock rows; serialising concurrent writers to one key is the
      store's job (unique constraint).
    """

    def __init__(
        self,
        session: Session,
        aggregator: PayrollAggregator | None = None,
    ):
        self._session = session
        self._aggregator = aggregator or PayrollAggregator()

    # =========================================================================
    # Writes
    # =========================================================================

    def save_record(self, record: SalaryRecord, actor_id: UUID | None = None) -> SalaryRecord:
        """Create the record, or replace the one already stored for its key."""
        with LogContext.bind(employee_id=record.employee_id):
            try:
                logger.info("salary_record_save_started", extra={
                    "year": record.year,
                    "station_location": record.station_location,
                })
                model = self._find(record.employee_id, record.year)
                if model is None:
                    self._session.add(SalaryRecordModel.from_dto(record, created_by_id=actor_id))
                    action = "created"
                else:
                    model.replace_with(record, updated_by_id=actor_id)
                    action = "replaced"
                self._session.commit()
                logger.info("salary_record_save_committed", extra={
                    "year": record.year,
                    "action": action,
                })
                return record
            except Exception:
                self._session.rollback()
                logger.warning("salary_record_save_rolled_back", extra={"year": record.year})
                raise

    def delete_record(self, employee_id: str, year: int) -> bool:
        """Delete the record for the key.  Returns False when none exists."""
        model = self._find(employee_id, year)
        if model is None:
            return False
        try:
            self._session.delete(model)
            self._session.commit()
            logger.info("salary_record_deleted", extra={
                "employee_id": employee_id,
                "year": year,
            })
            return True
        except Exception:
            self._session.rollback()
            raise

    # =========================================================================
    # Reads
    # =========================================================================

    def get_record(self, employee_id: str, year: int) -> SalaryRecord | None:
        model = self._find(employee_id, year)
        return model.to_dto() if model is not None else None

    def get_latest_record(self, employee_id: str) -> SalaryRecord | None:
        """The employee's record with the highest year."""
        stmt = (
            select(SalaryRecordModel)
            .where(SalaryRecordModel.employee_id == employee_id)
            .order_by(SalaryRecordModel.year.desc())
            .limit(1)
        )
        model = self._session.scalars(stmt).first()
        return model.to_dto() if model is not None else None

    def list_records(self, year: int | None = None) -> list[SalaryRecord]:
        stmt = select(SalaryRecordModel).order_by(
            SalaryRecordModel.year, SalaryRecordModel.employee_id
        )
        if year is not None:
            stmt = stmt.where(SalaryRecordModel.year == year)
        return [m.to_dto() for m in self._session.scalars(stmt)]

    def breakdown(self, employee_id: str, year: int) -> PayrollBreakdown | None:
        record = self.get_record(employee_id, year)
        if record is None:
            return None
        return self._aggregator.breakdown(record.components)

    def summarize(self, year: int) -> PayrollTotals:
        """Totals for every record of ``year``."""
        return self._aggregator.summarize(r.components for r in self.list_records(year))

    def summarize_by_station(self, year: int) -> dict[str, PayrollTotals]:
        return self._aggregator.summarize_by(
            (r.station_location, r.components) for r in self.list_records(year)
        )

    def _find(self, employee_id: str, year: int) -> SalaryRecordModel | None:
        stmt = select(SalaryRecordModel).where(
            SalaryRecordModel.employee_id == employee_id,
            SalaryRecordModel.year == year,
        )
        return self._session.scalars(stmt).one_or_none()
