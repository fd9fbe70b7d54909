import pytest

from recall_tracker.agents.curation_agent import CuratedDataset
from recall_tracker.utils.storage import InMemoryKeyValueStore

from factories import NOW


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def dataset():
    return CuratedDataset()


@pytest.fixture
def kv_store():
    return InMemoryKeyValueStore()
