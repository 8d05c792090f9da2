"""
Shared pytest fixtures for all tests.
"""
import tempfile
from pathlib import Path
from typing import Iterator

import pytest

from core import PubSub
from core.state import reset_state


@pytest.fixture(autouse=True)
def clear_state():
    """Reset the in-memory store before and after each test."""
    reset_state()
    yield
    reset_state()


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def bus() -> Iterator[PubSub]:
    """A fresh event bus, closed after the test."""
    pubsub = PubSub()
    yield pubsub
    pubsub.close()

