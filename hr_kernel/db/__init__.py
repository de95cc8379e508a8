"""Database layer - engine, base classes, and amount parsing."""

from hr_kernel.db.base import UUID, Base, DecimalAmount, TrackedBase, UUIDString
from hr_kernel.db.engine import (
    create_tables,
    get_engine,
    get_session,
    session_scope,
)
from hr_kernel.db.types import money_from_str

__all__ = [
    "get_engine",
    "get_session",
    "session_scope",
    "create_tables",
    "Base",
    "TrackedBase",
    "UUIDString",
    "DecimalAmount",
    "UUID",
    "money_from_str",
]
