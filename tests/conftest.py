"""Shared pytest fixtures for tests."""

import pytest
import structlog

from edn_py.edn import TagRegistry


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any structlog configuration a test applied."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def registry() -> TagRegistry:
    """Provide a fresh tag registry holding only the defaults."""
    return TagRegistry()


@pytest.fixture
def sum_and_double() -> dict:
    """Transformers used by the tag tests."""
    return {
        "sum": sum,
        "double": lambda value: value * 2,
    }
