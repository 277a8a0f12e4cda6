import pytest
from fastapi.testclient import TestClient

from landing_api.core.config import Settings
from landing_api.main import create_app

API_KEY = "test-admin-key"
ORIGIN = "https://landing.example.com"


def make_settings(tmp_path, **overrides) -> Settings:
    values = dict(
        DB_PATH=str(tmp_path / "leads.db"),
        API_KEY=API_KEY,
        ALLOWED_ORIGIN=ORIGIN,
        RATE_LIMIT_MAX=60,
        RATE_LIMIT_WINDOW_SECONDS=60,
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings(tmp_path):
    return make_settings(tmp_path)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def admin_headers():
    return {"X-API-Key": API_KEY}


@pytest.fixture
def db_session(app):
    db = app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
