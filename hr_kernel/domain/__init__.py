"""
Pure domain layer.

Holds the time abstraction shared by engines and services.  Nothing in
this package touches the ORM, the database, or I/O (apart from
``SystemClock``, the sanctioned boundary for wall-clock time).
"""

from hr_kernel.domain.clock import Clock, DeterministicClock, SystemClock

__all__ = [
    "Clock",
    "DeterministicClock",
    "SystemClock",
]
