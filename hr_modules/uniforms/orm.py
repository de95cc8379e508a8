"""
Uniform ORM Persistence Models (``hr_modules.uniforms.orm``).

Responsibility:
    SQLAlchemy ORM model persisting the ``UniformItem`` DTO, with
    ``to_dto()`` / ``from_dto()`` round-trip conversion.

Invariants enforced:
    - Monetary fields use Decimal (DecimalAmount: exact on SQLite, Numeric(38,9) elsewhere) -- NEVER float.
    - Only issuance facts are stored.  Tier, current value and expiry are
      derived at read time and have no column.
"""

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import Date, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from hr_kernel.db.base import TrackedBase


class UniformItemModel(TrackedBase):
    """
    ORM model for ``UniformItem``.

    Guarantees:
        - ``delivery_date`` is the issuance date used for depreciation.
        - Rows are never removed by expiry; only explicit deletes remove them.
    """

    __tablename__ = "hr_uniform_items"

    employee_id: Mapped[str] = mapped_column(String(50), nullable=False)
    item_type: Mapped[str] = mapped_column(String(200), nullable=False)
    quantity: Mapped[int] = mapped_column(nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(nullable=False)
    total_price: Mapped[Decimal] = mapped_column(nullable=False)
    delivery_date: Mapped[date] = mapped_column(Date, nullable=False)
    notes: Mapped[str | None] = mapped_column(String(4000), nullable=True)

    __table_args__ = (
        Index("idx_hr_uniform_employee", "employee_id"),
        Index("idx_hr_uniform_delivery_date", "delivery_date"),
    )

    def to_dto(self):
        from hr_modules.uniforms.models import UniformItem
        return UniformItem(
            id=self.id,
            employee_id=self.employee_id,
            item_type=self.item_type,
            quantity=self.quantity,
            unit_price=self.unit_price,
            total_price=self.total_price,
            delivery_date=self.delivery_date,
            notes=self.notes,
        )

    @classmethod
    def from_dto(cls, dto, created_by_id: UUID | None = None) -> "UniformItemModel":
        return cls(
            id=dto.id,
            employee_id=dto.employee_id,
            item_type=dto.item_type,
            quantity=dto.quantity,
            unit_price=dto.unit_price,
            total_price=dto.total_price,
            delivery_date=dto.delivery_date,
            notes=dto.notes,
            created_by_id=created_by_id,
        )

    def apply_dto(self, dto, updated_by_id: UUID | None = None) -> None:
        """Overwrite every stored field with the DTO's values."""
        self.employee_id = dto.employee_id
        self.item_type = dto.item_type
        self.quantity = dto.quantity
        self.unit_price = dto.unit_price
        self.total_price = dto.total_price
        self.delivery_date = dto.delivery_date
        self.notes = dto.notes
        self.updated_by_id = updated_by_id

    def __repr__(self) -> str:
        return (
            f"<UniformItemModel {self.employee_id}: "
            f"{self.quantity} x {self.item_type} ({self.delivery_date})>"
        )
