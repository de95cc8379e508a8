"""
Configuration Schema (``hr_config.schema``).

Frozen dataclasses describing the parsed HR core configuration.  They
hold plain values only; ``hr_config.bridges`` turns them into engine
objects.

    HrCoreConfig
      +-- ScheduleDef (uniform)
      +-- ScheduleDef (training_debt)
            +-- TierStepDef ...
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TierStepDef:
    """After ``months`` elapsed months, ``percent`` of the value remains."""

    months: int
    percent: int


@dataclass(frozen=True)
class ScheduleDef:
    """A named depreciation schedule, steps in descending month order."""

    name: str
    steps: tuple[TierStepDef, ...]


@dataclass(frozen=True)
class HrCoreConfig:
    """Runtime configuration for the HR core."""

    database_url: str
    uniform: ScheduleDef
    training_debt: ScheduleDef
    log_level: str = "INFO"
    month_counting: str = "calendar"
    training_debt_term_years: int = 3
    checksum: str = field(default="", compare=False)
