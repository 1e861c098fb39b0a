"""
Pytest configuration and shared fixtures for nodeparams tests.

Provides:
- Isolated ParamTable fixtures (no process environment leakage)
- Loopback socket fixtures for free and occupied ports
- A deterministic local address resolver
"""

from __future__ import annotations

import logging
import socket
from collections.abc import Callable, Iterator
from typing import Any

import pytest

from nodeparams.core.params import ParamTable
from nodeparams.utils.network import get_available_port


LOOPBACK = "127.0.0.1"


# ============================================================================
# Logging Configuration
# ============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Configure logging for tests."""
    logging.basicConfig(level=logging.DEBUG)


# ============================================================================
# Parameter Store Fixtures
# ============================================================================


@pytest.fixture
def make_table() -> Callable[..., ParamTable]:
    """Factory for ParamTables isolated from ``os.environ``."""

    def _make(
        params: dict[str, Any] | None = None,
        *,
        environ: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> ParamTable:
        return ParamTable(params, environ=environ if environ is not None else {}, **kwargs)

    return _make


@pytest.fixture
def empty_table(make_table: Callable[..., ParamTable]) -> ParamTable:
    """ParamTable with no parameters, no environment and no defaults."""
    return make_table(use_defaults=False)


@pytest.fixture
def loopback_resolver() -> Callable[[], str]:
    """Address resolver pinned to the loopback interface."""
    return lambda: LOOPBACK


# ============================================================================
# Socket Fixtures
# ============================================================================


@pytest.fixture
def free_port() -> int:
    """A port that was free a moment ago."""
    return get_available_port()


@pytest.fixture
def occupied_port() -> Iterator[int]:
    """A port held by a listening socket for the duration of the test."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("", 0))
    sock.listen(1)
    try:
        yield sock.getsockname()[1]
    finally:
        sock.close()


@pytest.fixture
def can_bind() -> Callable[[int], bool]:
    """Check whether a fresh socket can bind a port on all interfaces right now."""

    def _can_bind(port: int) -> bool:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            try:
                sock.bind(("", port))
            except OSError:
                return False
        return True

    return _can_bind
