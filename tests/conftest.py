import pytest
from fastapi.testclient import TestClient

from config import Settings
from db import PrimaryStore
from main import create_app
from repository import SubmissionStore


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'primary.db'}",
        data_dir=str(tmp_path / "data"),
        uploads_dir=str(tmp_path / "uploads"),
        db_reconnect_interval=0,
    )


@pytest.fixture
def primary(settings):
    store = PrimaryStore(settings.database_url)
    yield store
    store.disconnect()


@pytest.fixture
def offline_store(settings):
    return SubmissionStore(settings.data_dir)


@pytest.fixture
def online_store(settings, primary):
    assert primary.connect()
    return SubmissionStore(settings.data_dir, primary)


@pytest.fixture
def make_client(settings):
    def _make(store, **overrides):
        app = create_app(settings.model_copy(update=overrides), store)
        return TestClient(app)

    return _make
