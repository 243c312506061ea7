"""
Shared fixtures.

Every test gets its own SQLite file and its own application instance, so the
catalog starts from the seeded sample products each time.
"""

import pytest
from fastapi.testclient import TestClient

from app.config.settings import Settings
from app.main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'pos.sqlite'}",
        seed_sample_data=True,
        log_level="WARNING",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    # Entering the client runs the lifespan: open storage, create tables, seed
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def database(app, client):
    return app.state.database


@pytest.fixture
def db_session(database):
    session = database.session()
    yield session
    session.close()
