"""
Configuration Loader (``hr_config.loader``).

Responsibility
--------------
Loads the HR core YAML file and parses it into ``hr_config.schema``
dataclasses.  Runtime callers use ``hr_config.get_active_config()``
instead of calling this directly.

Invariants enforced
-------------------
* All parse errors raise ``ValueError`` or ``KeyError`` with descriptive
  messages; required keys have no silent defaults.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  configuration identity.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing ``schedules`` entries  -> ``KeyError`` propagates.
* Term years not matching the training-debt horizon  -> ``ValueError``.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from hr_config.schema import HrCoreConfig, ScheduleDef, TierStepDef

VALID_MONTH_COUNTING = {"calendar", "completed"}
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_schedule(name: str, data: dict[str, Any]) -> ScheduleDef:
    """
    Parse a ``ScheduleDef`` from a dict with a ``steps`` list.

    Steps are sorted by descending months so YAML authors may list them
    in any order.
    """
    raw_steps = data["steps"]
    if not raw_steps:
        raise ValueError(f"Schedule '{name}' has no steps")
    steps = tuple(
        TierStepDef(months=int(s["months"]), percent=int(s["percent"]))
        for s in raw_steps
    )
    return ScheduleDef(
        name=name,
        steps=tuple(sorted(steps, key=lambda s: s.months, reverse=True)),
    )


def parse_config(data: dict[str, Any], database_url: str | None = None) -> HrCoreConfig:
    """
    Parse an ``HrCoreConfig`` from the loaded YAML dict.

    ``database_url`` (from the environment) wins over the file value.
    """
    schedules = data["schedules"]
    month_counting = data.get("month_counting", "calendar")
    if month_counting not in VALID_MONTH_COUNTING:
        raise ValueError(
            f"month_counting must be one of {VALID_MONTH_COUNTING}, got '{month_counting}'"
        )
    log_level = str(data.get("log_level", "INFO")).upper()
    if log_level not in VALID_LOG_LEVELS:
        raise ValueError(f"log_level must be one of {VALID_LOG_LEVELS}, got '{log_level}'")

    training_debt = parse_schedule("training_debt", schedules["training_debt"])
    term_years = int(data.get("training_debt_term_years", 3))
    if training_debt.steps[0].months != term_years * 12:
        raise ValueError(
            f"training_debt horizon ({training_debt.steps[0].months} months) does not "
            f"match training_debt_term_years ({term_years})"
        )

    url = database_url or data.get("database_url")
    if not url:
        raise ValueError("database_url is required")

    return HrCoreConfig(
        database_url=url,
        uniform=parse_schedule("uniform", schedules["uniform"]),
        training_debt=training_debt,
        log_level=log_level,
        month_counting=month_counting,
        training_debt_term_years=term_years,
        checksum=compute_checksum(data),
    )


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
