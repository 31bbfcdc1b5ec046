import pytest
from fastapi.testclient import TestClient

from core.event_bus import event_bus
from core.history_store import HistoryStore
from core.schemas import NavigationRecord
from core.settings_store import CloakStore, SettingsStore
from core.storage import JsonKeyValueStore
from shared import state


@pytest.fixture
def storage(tmp_path):
    return JsonKeyValueStore(tmp_path / "profile")


@pytest.fixture
def history(storage):
    return HistoryStore(storage)


@pytest.fixture
def settings_store(storage):
    return SettingsStore(storage)


@pytest.fixture
def cloak_store(storage):
    return CloakStore(storage)


@pytest.fixture
def make_record():
    def _make(url, title="Example", **kwargs):
        return NavigationRecord(title=title, url=url, **kwargs)
    return _make


@pytest.fixture
def client(tmp_path, monkeypatch):
    """API client on a throwaway profile directory (lifespan not started)."""
    monkeypatch.setenv("COSMICLINK_DATA_DIR", str(tmp_path / "api-profile"))
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    state.reset_state()
    event_bus.reset()

    from api import app
    yield TestClient(app)

    app.dependency_overrides.clear()
    state.reset_state()
    event_bus.reset()
