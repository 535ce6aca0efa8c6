"""
Pytest configuration and shared fixtures for all nsresolve tests.

The check driver holds the only expensive object (the cached Lark parser), so
it is created once per session and shared; every check still gets a fresh
SemaCtxt and ResolutionSession.
"""

import sys
import pytest
from typing import Optional
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent.parent))  # for `from tests.test_utils import ...`
from nsresolve.analysis.session import ResolutionSession
from nsresolve.compiler.driver import CheckDriver, CheckResult
from nsresolve.frontend.parser import Parser

FIXTURES_DIR = Path(__file__).parent.parent / "examples" / "fixtures"


# =============================================================================
# Session-scoped fixtures (shared across all tests)
# =============================================================================

@pytest.fixture(scope="session")
def session_parser():
    """Parser is created once with Lark native caching."""
    return Parser()


@pytest.fixture(scope="session")
def session_driver(session_parser):
    """
    Session-scoped check driver shared across ALL tests.

    Safe to share: the driver creates fresh pass instances and a fresh
    SemaCtxt for every check.
    """
    return CheckDriver(parser=session_parser)


@pytest.fixture(scope="session")
def fixtures_dir():
    return FIXTURES_DIR


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


# =============================================================================
# Function-scoped fixtures (default - one per test)
# =============================================================================

@pytest.fixture
def session():
    """Fresh resolution session - sessions accumulate state, never share them."""
    return ResolutionSession()


@pytest.fixture
def check_source(session_driver):
    """
    Convenience fixture: check a fixture-dialect source string.
    """
    def _check(source: str, source_file: Optional[str] = None) -> CheckResult:
        return session_driver.check(source, source_file or "<test>.cpp")

    return _check


# =============================================================================
# Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers for test organization."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "examples: marks tests that run the fixture files under examples/fixtures"
    )
