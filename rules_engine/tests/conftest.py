"""
Shared fixtures for rules engine tests.
"""

import pytest

from shared.config import EngineConfig
from rules_engine import Engine, reset_default_engine


@pytest.fixture
def engine_config():
    """Config with metrics disabled."""
    return EngineConfig(engine_name="test", enable_metrics=False)


@pytest.fixture
def engine(engine_config):
    """Create an independent Engine instance."""
    return Engine(config=engine_config)


@pytest.fixture(autouse=True)
def fresh_default_engine():
    """Isolate tests that touch the process-wide engine."""
    reset_default_engine()
    yield
    reset_default_engine()
