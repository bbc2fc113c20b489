"""
Pytest configuration and shared fixtures.
"""

import os
import sys
import pytest

sys.path.append(os.path.join(os.getcwd(), "src"))

# Settings are built when opstracker.platform.config is first imported
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("STORAGE_BACKEND", "memory")

from opstracker.engine.calendar import MONTHS, TEAM  # noqa: E402
from opstracker.engine.state import init_state  # noqa: E402
from opstracker.engine.tracker_service import TrackerService  # noqa: E402
from opstracker.storage.memory import InMemoryBlobStore  # noqa: E402

STORAGE_KEY = "test-tracker"


@pytest.fixture
def fresh_state():
    """A freshly initialized Tracker State for the default roster and months."""
    return init_state(TEAM, MONTHS)


@pytest.fixture
def memory_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def tracker(memory_store) -> TrackerService:
    """Tracker service over an empty in-memory store."""
    return TrackerService(store=memory_store, storage_key=STORAGE_KEY)
