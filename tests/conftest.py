"""Pytest fixtures for tests."""

from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from retint.catalog import ThemeCatalog
from retint.colors import clear_parse_cache
from retint.dom import Document
from retint.transform import TransformContext, reset_default_context


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> float:
        self.now += ms
        return self.now


@pytest.fixture(autouse=True)
def isolated_caches():
    """Give every test its own default transform context and parse cache."""
    reset_default_context()
    clear_parse_cache()
    yield
    reset_default_context()


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def document(clock):
    """An empty page driven by the fake clock."""
    return Document(clock=clock)


@pytest.fixture
def context():
    """A fresh transform context."""
    return TransformContext()


@pytest.fixture(scope="session")
def catalog():
    """The bundled theme catalog."""
    return ThemeCatalog()


@pytest.fixture
def dark_theme(catalog):
    return catalog.get("dark")


@pytest.fixture
def light_theme(catalog):
    return catalog.get("light")


@pytest.fixture
def night_warm_theme(catalog):
    return catalog.get("night-warm")
