"""
Pytest fixtures for the settle engine test suite.

Provides:
- Structured logging configuration and log capture
- Engine instances and a shared participant list
"""

import json
import logging
from io import StringIO

import pytest

from settle_engines import BalanceAggregator, DebtSimplifier, SplitCalculator
from settle_kernel.domain.values import Participant
from settle_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
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
    Capture settle_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            DebtSimplifier().simplify(balances)
            logs = captured_logs()
            assert any(r["message"] == "simplify_completed" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("settle_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Engines
# =============================================================================


@pytest.fixture
def calculator() -> SplitCalculator:
    return SplitCalculator()


@pytest.fixture
def aggregator() -> BalanceAggregator:
    return BalanceAggregator()


@pytest.fixture
def simplifier() -> DebtSimplifier:
    return DebtSimplifier()


@pytest.fixture
def trio() -> list[Participant]:
    """Three participants in a fixed order."""
    return [
        Participant("alice", "Alice"),
        Participant("bob", "Bob"),
        Participant("carol", "Carol"),
    ]
