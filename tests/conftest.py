from dataclasses import replace

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.repositories import MemoryStore

LEADERBOARD_KEY = "global_leaderboard"


class FlakyStore(MemoryStore):
    """MemoryStore whose first ``fail_gets``/``fail_sets`` calls raise."""

    def __init__(self, fail_gets=0, fail_sets=0, initial=None):
        super().__init__(initial)
        self.fail_gets = fail_gets
        self.fail_sets = fail_sets
        self.get_calls = 0
        self.set_calls = 0

    def get(self, key):
        self.get_calls += 1
        if self.get_calls <= self.fail_gets:
            raise ConnectionError("store down")
        return super().get(key)

    def set(self, key, value):
        self.set_calls += 1
        if self.set_calls <= self.fail_sets:
            raise ConnectionError("store down")
        super().set(key, value)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def client(store):
    original_store = app.state.store
    original_settings = app.state.settings
    app.state.store = store
    app.state.settings = replace(
        original_settings,
        store_url="memory://test",
        store_retry_delay_seconds=0.0,
    )
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.state.store = original_store
        app.state.settings = original_settings
