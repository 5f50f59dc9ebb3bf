import pytest
from prnotify_fakes import DictStore, RecordingChat


@pytest.fixture
def store():
    return DictStore()


@pytest.fixture
def chat():
    return RecordingChat()
