"""
HR Modules.

Thin orchestration layers over the HR kernel and engines.
Each module contains:
- Domain models (frozen DTOs validated at construction)
- ORM persistence models with to_dto()/from_dto()
- Pure report helpers
- A service owning the transaction boundary

Modules:
- Uniforms: issued uniform items, depreciation, active views, reports
- Training: training-cost debts with a fixed expiry horizon
- Salary: per employee-year salary records, upsert, payroll summaries

Calculation logic lives in ``hr_engines``.
"""

from hr_modules import salary, training, uniforms

__all__ = ["salary", "training", "uniforms"]
