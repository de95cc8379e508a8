"""
Pytest fixtures for the HR core test suite.

Provides:
- In-memory SQLite sessions with every module table created
- A deterministic clock pinned to a known date
- Structured log capture

Environment Variables:
- HR_CORE_TEST_DATABASE_URL: optional SQLAlchemy URL to run the module
  tests against a real server instead of in-memory SQLite.
"""

import json
import logging
import os
from datetime import date
from io import StringIO
from uuid import uuid4

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from hr_engines.depreciation import BenefitDepreciationEngine
from hr_engines.payroll import PayrollAggregator
from hr_kernel.db.base import Base
from hr_kernel.domain.clock import DeterministicClock
from hr_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from hr_modules._orm_registry import import_all_orm_models

# Test actor ID for all write operations
TEST_ACTOR_ID = uuid4()

# Reference date used across module tests
TODAY = date(2024, 7, 1)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG, stream=StringIO())
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture hr_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, uniform_service):
            uniform_service.issue_uniform(...)
            logs = captured_logs()
            assert any(r["message"] == "uniform_issue_committed" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("hr_kernel")
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture
def db_engine():
    url = os.environ.get("HR_CORE_TEST_DATABASE_URL", "sqlite://")
    kwargs = {}
    if url == "sqlite://":
        kwargs = {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
    engine = create_engine(url, **kwargs)
    import_all_orm_models()
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(db_engine):
    factory = sessionmaker(bind=db_engine, expire_on_commit=False)
    session = factory()
    yield session
    session.rollback()
    session.close()


# =============================================================================
# Domain fixtures
# =============================================================================


@pytest.fixture
def deterministic_clock():
    return DeterministicClock(TODAY)


@pytest.fixture
def depreciation_engine(deterministic_clock):
    return BenefitDepreciationEngine(clock=deterministic_clock)


@pytest.fixture
def aggregator():
    return PayrollAggregator()


@pytest.fixture
def test_actor_id():
    return TEST_ACTOR_ID
