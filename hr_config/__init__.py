"""
hr_config -- single public entrypoint for HR core configuration.

Responsibility:
    Provides the ONLY way to obtain configuration at runtime through
    ``get_active_config()``.  No other component reads configuration
    files or environment variables directly.

Architecture position:
    Configuration -- sits above ``hr_kernel`` and ``hr_engines``.  Neither
    may import ``hr_config``; ``hr_config.bridges`` translates parsed
    definitions into engine objects.

Failure modes:
    - ``FileNotFoundError`` -- the requested YAML file does not exist.
    - ``ValueError`` / ``KeyError`` -- schema validation failures.
    - ``InvalidScheduleError`` -- schedule steps rejected by the engine.

Audit relevance:
    Every successful ``get_active_config()`` call emits an
    ``HR_CONFIG_TRACE`` log entry with the config path and checksum.
"""

from __future__ import annotations

import os
from pathlib import Path

from hr_config.bridges import build_schedule
from hr_config.loader import load_yaml_file, parse_config
from hr_config.schema import HrCoreConfig, ScheduleDef, TierStepDef
from hr_kernel.logging_config import get_logger

_logger = get_logger("config")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "defaults" / "hr_core.yaml"
DATABASE_URL_ENV = "HR_CORE_DATABASE_URL"


def get_active_config(config_path: Path | None = None) -> HrCoreConfig:
    """The ONLY public configuration entrypoint.

    Guarantees:
        - Both schedules have been validated by the engine's schedule type.
        - ``HR_CORE_DATABASE_URL`` overrides the file's ``database_url``.
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    config = parse_config(
        load_yaml_file(path),
        database_url=os.environ.get(DATABASE_URL_ENV),
    )

    # reject schedules the engine would refuse before anyone uses them
    build_schedule(config.uniform)
    build_schedule(config.training_debt)

    _logger.info(
        "HR_CONFIG_TRACE",
        extra={
            "trace_type": "HR_CONFIG_TRACE",
            "config_path": str(path),
            "checksum": config.checksum,
            "month_counting": config.month_counting,
        },
    )
    return config


__all__ = [
    "DATABASE_URL_ENV",
    "DEFAULT_CONFIG_PATH",
    "HrCoreConfig",
    "ScheduleDef",
    "TierStepDef",
    "get_active_config",
]
