"""
Salary Domain Models (``hr_modules.salary.models``).

Responsibility
--------------
The salary record for one employee-year: its key, station, and the
``SalaryComponents`` the payroll aggregator derives totals from.

Invariants enforced
-------------------
* Frozen, keyed by ``(employee_id, year)``.
* Every component is a non-negative ``Decimal``; validation happens here,
  at the boundary, never inside the engine.
* Gross, full gross and net are not fields; they are derived by
  ``hr_engines.payroll.PayrollAggregator``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from hr_engines.payroll import SalaryComponents
from hr_kernel.exceptions import InvalidRecordError
from hr_kernel.logging_config import get_logger
from hr_modules._validation import require_text, to_amount

logger = get_logger("modules.salary.models")

_RECORD = "SalaryRecord"


def validated_components(components: SalaryComponents) -> SalaryComponents:
    """Copy of ``components`` with every field coerced and checked."""
    return SalaryComponents(**{
        name: to_amount(_RECORD, name, value)
        for name, value in components.as_dict().items()
    })


@dataclass(frozen=True)
class SalaryRecord:
    """Salary components of one employee for one year."""

    employee_id: str
    year: int
    components: SalaryComponents
    station_location: str = ""

    def __post_init__(self):
        object.__setattr__(self, "employee_id", require_text(_RECORD, "employee_id", self.employee_id))
        if isinstance(self.year, bool) or not isinstance(self.year, int) or self.year < 1:
            raise InvalidRecordError(_RECORD, "year", f"expected a positive year, got {self.year!r}")
        if not isinstance(self.components, SalaryComponents):
            raise InvalidRecordError(_RECORD, "components", "SalaryComponents required")
        object.__setattr__(self, "components", validated_components(self.components))
        object.__setattr__(self, "station_location", (self.station_location or "").strip())

    @property
    def key(self) -> tuple[str, int]:
        return (self.employee_id, self.year)

    @classmethod
    def from_fields(
        cls,
        employee_id: str,
        year: int,
        station_location: str = "",
        **amounts: Any,
    ) -> SalaryRecord:
        """
        Build a record from flat component keyword arguments.

        Unknown component names are rejected; missing ones default to zero.
        """
        unknown = set(amounts) - set(SalaryComponents.field_names())
        if unknown:
            raise InvalidRecordError(_RECORD, ",".join(sorted(unknown)), "unknown component")
        coerced = {name: to_amount(_RECORD, name, value) for name, value in amounts.items()}
        return cls(
            employee_id=employee_id,
            year=year,
            components=SalaryComponents(**coerced),
            station_location=station_location,
        )
