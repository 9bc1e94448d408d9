"""
Pytest configuration for peano_eval tests.

Provides:
- Hypothesis profiles (select with HYPOTHESIS_PROFILE)
- A fresh default engine per test, so env overrides and memo tables
  never leak between tests
- Shared engine fixtures
"""

import os

import pytest
from hypothesis import settings

from peano_eval import Engine, EngineConfig, set_default_engine

# =============================================================================
# Hypothesis Configuration
# =============================================================================
# - print_blob=True makes failures easy to reproduce
# - "ci" derandomizes so a failing run is a failing run everywhere

settings.register_profile(
    "default",
    print_blob=True,
    derandomize=False,
    deadline=None,
)

settings.register_profile(
    "ci",
    print_blob=True,
    derandomize=True,
    deadline=None,
)

settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "default"))


# =============================================================================
# Shared fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def _fresh_default_engine(monkeypatch):
    for key in list(os.environ):
        if key.startswith("PEANO_"):
            monkeypatch.delenv(key, raising=False)
    set_default_engine(None)
    yield
    set_default_engine(None)


@pytest.fixture
def engine() -> Engine:
    return Engine()


@pytest.fixture
def tracing_engine() -> Engine:
    return Engine(EngineConfig(trace=True))
