"""
Salary ORM Persistence Models (``hr_modules.salary.orm``).

Responsibility:
    SQLAlchemy ORM model persisting ``SalaryRecord``.  Each component is a
    column; derived totals have no column.

Invariants enforced:
    - At most one row per ``(employee_id, year)``
      (uq_hr_salary_record_employee_year).  Concurrent inserts for the same
      key are serialised by this constraint; the loser gets IntegrityError.
    - All monetary fields use Decimal (DecimalAmount: exact on SQLite, Numeric(38,9) elsewhere).
"""

from decimal import Decimal
from uuid import UUID

from sqlalchemy import Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from hr_kernel.db.base import TrackedBase
from hr_engines.payroll import SalaryComponents


class SalaryRecordModel(TrackedBase):
    """
    ORM model for ``SalaryRecord``.

    Guarantees:
        - ``replace_with`` overwrites every component and the station; no
          field from the previous version survives.
    """

    __tablename__ = "hr_salary_records"

    employee_id: Mapped[str] = mapped_column(String(50), nullable=False)
    year: Mapped[int] = mapped_column(nullable=False)
    station_location: Mapped[str] = mapped_column(String(50), nullable=False, default="")

    basic_salary: Mapped[Decimal] = mapped_column(nullable=False)
    transport_allowance: Mapped[Decimal] = mapped_column(nullable=False)
    incentives: Mapped[Decimal] = mapped_column(nullable=False)
    living_allowance: Mapped[Decimal] = mapped_column(nullable=False)
    station_allowance: Mapped[Decimal] = mapped_column(nullable=False)
    mobile_allowance: Mapped[Decimal] = mapped_column(nullable=False)
    employee_insurance: Mapped[Decimal] = mapped_column(nullable=False)
    employer_social_insurance: Mapped[Decimal] = mapped_column(nullable=False)
    health_insurance: Mapped[Decimal] = mapped_column(nullable=False)
    income_tax: Mapped[Decimal] = mapped_column(nullable=False)

    __table_args__ = (
        UniqueConstraint("employee_id", "year", name="uq_hr_salary_record_employee_year"),
        Index("idx_hr_salary_record_year", "year"),
        Index("idx_hr_salary_record_station", "station_location"),
    )

    def to_dto(self):
        from hr_modules.salary.models import SalaryRecord
        return SalaryRecord(
            employee_id=self.employee_id,
            year=self.year,
            station_location=self.station_location,
            components=SalaryComponents(**{
                name: getattr(self, name) for name in SalaryComponents.field_names()
            }),
        )

    @classmethod
    def from_dto(cls, dto, created_by_id: UUID | None = None) -> "SalaryRecordModel":
        return cls(
            employee_id=dto.employee_id,
            year=dto.year,
            station_location=dto.station_location,
            created_by_id=created_by_id,
            **dto.components.as_dict(),
        )

    def replace_with(self, dto, updated_by_id: UUID | None = None) -> None:
        """Whole-record replace: station and every component."""
        self.station_location = dto.station_location
        for name, value in dto.components.as_dict().items():
            setattr(self, name, value)
        self.updated_by_id = updated_by_id

    def __repr__(self) -> str:
        return f"<SalaryRecordModel {self.employee_id}/{self.year}>"
