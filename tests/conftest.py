import os
import sys
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

# Ensure `import backend.hrdesk...` works regardless of where pytest is run from.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Must be set before importing backend.hrdesk.config so a developer .env never leaks in.
os.environ["DISABLE_DOTENV"] = "1"

TEST_SECRET = "test-secret-not-for-production"


@pytest.fixture()
def settings(tmp_path: Path):
    from backend.hrdesk.config import Settings

    return Settings(
        jwt_secret=TEST_SECRET,
        database_url=f"sqlite+pysqlite:///{tmp_path / 'test.sqlite3'}",
        # Minimum bcrypt cost keeps the suite fast; the default is covered separately.
        bcrypt_rounds=4,
    )


@pytest.fixture()
def app(settings) -> FastAPI:
    """A fresh app wired to a temporary SQLite DB."""
    from backend.hrdesk.main import create_app

    return create_app(settings)


@pytest.fixture()
def client(app: FastAPI):
    # Entering the context runs the lifespan, which creates the tables.
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def db_session(app: FastAPI, client: TestClient):
    """Direct SQLAlchemy session bound to the same DB the test app uses."""
    db = app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def hr_token(client: TestClient) -> str:
    r = client.post(
        "/api/auth/signup",
        json={"name": "HR", "email": "hr@example.com", "password": "secret1"},
    )
    assert r.status_code == 200, r.text
    return r.json()["token"]


@pytest.fixture()
def hr_headers(hr_token: str) -> dict:
    return {"Authorization": f"Bearer {hr_token}"}
