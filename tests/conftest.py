"""
Pytest configuration and shared fixtures for all ferrolint tests.

Drivers are stateless between check() calls, so one instance per session is
enough for tests that use default lint levels.
"""

import sys
import pytest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from ferrolint.driver import LintDriver
from ferrolint.frontend.parser import Parser


# =============================================================================
# Session-scoped fixtures (shared across all tests)
# =============================================================================

@pytest.fixture(scope="session")
def session_driver():
    """
    Session-scoped driver shared across ALL tests.

    - Parser is created once with Lark native caching
    - Lint passes are instantiated per check(), so no state leaks between tests
    """
    return LintDriver()


@pytest.fixture(scope="session")
def session_parser():
    return Parser()


# =============================================================================
# Class-scoped fixtures (shared within a test class)
# =============================================================================

@pytest.fixture(scope="class")
def driver(session_driver):
    """Class-scoped driver - returns session driver (stateless, safe to share)."""
    return session_driver


@pytest.fixture(scope="class")
def parser(session_parser):
    return session_parser


def pytest_configure(config):
    """Register custom markers for test organization."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
