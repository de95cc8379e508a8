"""
Training Module (``hr_modules.training``).

Training-cost debts: the cost of a paid course stays owed for three years
from the course date, then lapses on its own.
"""

from hr_modules.training.models import (
    EmployeeDebtSummary,
    ExpiryRange,
    TrainingDebt,
    TrainingDebtReport,
)
from hr_modules.training.service import TrainingDebtService

__all__ = [
    "TrainingDebt",
    "EmployeeDebtSummary",
    "ExpiryRange",
    "TrainingDebtReport",
    "TrainingDebtService",
]
