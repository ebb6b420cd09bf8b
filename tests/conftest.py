"""
Pytest configuration and shared fixtures for daemonaddr tests.

Provides:
- A deterministic static host table used in place of real DNS
- A mock lookup for asserting that no lookup happens
- Environment isolation for the daemon address variable
"""

import logging
from unittest.mock import MagicMock

import pytest

from daemonaddr.models.constants import DAEMON_ADDRESS_ENV
from daemonaddr.utils.dns import StaticHostLookup


# ============================================================================
# Logging Configuration
# ============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Configure logging for tests."""
    logging.basicConfig(level=logging.DEBUG)


# ============================================================================
# Environment
# ============================================================================


@pytest.fixture(autouse=True)
def clear_daemon_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Never let the host's daemon address leak into a test."""
    monkeypatch.delenv(DAEMON_ADDRESS_ENV, raising=False)


# ============================================================================
# Lookup Fixtures
# ============================================================================


HOST_TABLE: dict[str, list[str]] = {
    "xray-daemon": ["10.0.0.5", "10.0.0.6"],
    "daemon.example.com": ["192.0.2.10"],
    "v6only.internal": ["2001:db8::5"],
    "mixed.internal": ["2001:db8::1", "192.0.2.7"],
    "empty.internal": [],
}


@pytest.fixture
def static_lookup() -> StaticHostLookup:
    """Static host table; unknown names raise ``socket.gaierror``."""
    return StaticHostLookup(HOST_TABLE)


@pytest.fixture
def mock_lookup() -> MagicMock:
    """Lookup double whose calls can be asserted on."""
    lookup = MagicMock()
    lookup.lookup.return_value = []
    return lookup
