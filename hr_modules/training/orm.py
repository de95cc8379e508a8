"""
Training Debt ORM Persistence Models (``hr_modules.training.orm``).

Responsibility:
    SQLAlchemy ORM model persisting the ``TrainingDebt`` DTO.

Invariants enforced:
    - One debt per employee and course (uq_hr_training_debt_employee_course).
    - ``cost`` uses Decimal (DecimalAmount: exact on SQLite, Numeric(38,9) elsewhere).
    - Expiry date and activity are derived, never stored.
"""

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import Date, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from hr_kernel.db.base import TrackedBase


class TrainingDebtModel(TrackedBase):
    """ORM model for ``TrainingDebt``."""

    __tablename__ = "hr_training_debts"

    employee_id: Mapped[str] = mapped_column(String(50), nullable=False)
    course_name: Mapped[str] = mapped_column(String(200), nullable=False)
    cost: Mapped[Decimal] = mapped_column(nullable=False)
    actual_date: Mapped[date] = mapped_column(Date, nullable=False)

    __table_args__ = (
        UniqueConstraint(
            "employee_id", "course_name",
            name="uq_hr_training_debt_employee_course",
        ),
        Index("idx_hr_training_debt_actual_date", "actual_date"),
    )

    def to_dto(self, term_years: int | None = None):
        from hr_modules.training.models import DEFAULT_DEBT_TERM_YEARS, TrainingDebt
        return TrainingDebt(
            id=self.id,
            employee_id=self.employee_id,
            course_name=self.course_name,
            cost=self.cost,
            actual_date=self.actual_date,
            term_years=term_years or DEFAULT_DEBT_TERM_YEARS,
        )

    @classmethod
    def from_dto(cls, dto, created_by_id: UUID | None = None) -> "TrainingDebtModel":
        return cls(
            id=dto.id,
            employee_id=dto.employee_id,
            course_name=dto.course_name,
            cost=dto.cost,
            actual_date=dto.actual_date,
            created_by_id=created_by_id,
        )

    def __repr__(self) -> str:
        return (
            f"<TrainingDebtModel {self.employee_id}: "
            f"{self.course_name} {self.cost} ({self.actual_date})>"
        )
