"""
Uniforms Module (``hr_modules.uniforms``).

Responsibility
--------------
Uniform items issued to employees.  Each item's value steps down by a
quarter every three months and reaches zero after a year; items at zero
drop out of the active view but stay on record.

Invariants enforced
-------------------
* Depreciation is computed, never stored.
* Expiry is a read-time filter, not a delete.
"""

from hr_modules.uniforms.models import (
    UniformEmployeeSummary,
    UniformItem,
    UniformReport,
    UniformTypeSummary,
)
from hr_modules.uniforms.service import UniformService

__all__ = [
    "UniformItem",
    "UniformEmployeeSummary",
    "UniformTypeSummary",
    "UniformReport",
    "UniformService",
]
