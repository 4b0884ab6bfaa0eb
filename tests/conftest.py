"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Every test starts from a clean configuration state: KVCTL_* environment
variables are removed, cached settings are cleared, and logging handlers
installed by a command are torn down afterwards.
"""

import logging
import os
from collections.abc import Generator

import pytest
import structlog

from kvctl.core.config import get_app_config, get_settings


# =============================================================================
# Configuration Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Drop KVCTL_* env vars and clear config caches around each test."""
    for name in list(os.environ):
        if name.startswith("KVCTL_"):
            monkeypatch.delenv(name, raising=False)

    get_settings.cache_clear()
    get_app_config.cache_clear()
    yield
    get_settings.cache_clear()
    get_app_config.cache_clear()


# =============================================================================
# Logging Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _reset_logging() -> Generator[None, None, None]:
    """Remove handlers added by setup_logging so streams from one test never leak."""
    yield
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(logging.WARNING)
    structlog.reset_defaults()
