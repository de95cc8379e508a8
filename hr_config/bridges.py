"""
Config -> Engine Bridges.

Functions that convert ``HrCoreConfig`` definitions into engine and
service inputs.  They live in hr_config (the producer) because engines
must never import hr_config.

Usage:
    from hr_config import get_active_config
    from hr_config.bridges import build_depreciation_engine, build_schedule

    config = get_active_config()
    engine = build_depreciation_engine(config, clock)
    schedule = build_schedule(config.uniform)
"""

from __future__ import annotations

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from hr_config.schema import HrCoreConfig, ScheduleDef
from hr_engines.dates import MonthCounting
from hr_engines.depreciation import BenefitDepreciationEngine, DepreciationSchedule
from hr_kernel.db.engine import init_engine_from_url
from hr_kernel.domain.clock import Clock
from hr_kernel.logging_config import configure_logging
from hr_modules.training.service import TrainingDebtService
from hr_modules.uniforms.service import UniformService


def build_schedule(defn: ScheduleDef) -> DepreciationSchedule:
    """Engine schedule from its config definition (validated on construction)."""
    return DepreciationSchedule.from_pairs(
        defn.name, ((s.months, s.percent) for s in defn.steps)
    )


def build_depreciation_engine(
    config: HrCoreConfig, clock: Clock | None = None
) -> BenefitDepreciationEngine:
    return BenefitDepreciationEngine(
        clock=clock, counting=MonthCounting(config.month_counting)
    )


def build_uniform_service(
    config: HrCoreConfig, session: Session, clock: Clock | None = None
) -> UniformService:
    return UniformService(
        session,
        clock=clock,
        engine=build_depreciation_engine(config, clock),
        schedule=build_schedule(config.uniform),
    )


def build_training_debt_service(
    config: HrCoreConfig, session: Session, clock: Clock | None = None
) -> TrainingDebtService:
    return TrainingDebtService(
        session,
        clock=clock,
        engine=build_depreciation_engine(config, clock),
        schedule=build_schedule(config.training_debt),
        term_years=config.training_debt_term_years,
    )


def init_from_config(config: HrCoreConfig, echo: bool = False) -> Engine:
    """
    Configure logging at the configured level, then bind the database.

    Must run before any other ``configure_logging`` call; the first call wins.
    """
    configure_logging(level=config.log_level)
    return init_engine_from_url(config.database_url, echo=echo)
