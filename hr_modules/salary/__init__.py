"""
Salary Module (``hr_modules.salary``).

One salary record per employee and year, saved with upsert semantics.
Gross, full gross and net come from ``hr_engines.payroll``.
"""

from hr_modules.salary.models import SalaryRecord, validated_components
from hr_modules.salary.service import SalaryRecordService

__all__ = [
    "SalaryRecord",
    "SalaryRecordService",
    "validated_components",
]
