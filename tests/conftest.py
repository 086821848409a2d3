import os

# Must be set before streamline.config is imported
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"

from datetime import datetime  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from streamline.database import Database  # noqa: E402
from streamline.main import create_app  # noqa: E402
from streamline.models import Schedule  # noqa: E402
from streamline.seed import DEMO_PASSWORD, seed  # noqa: E402


@pytest.fixture
def database():
    database = Database("sqlite://").open()
    database.create_all()
    yield database
    database.close()


@pytest.fixture
def db_session(database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def seeded(db_session):
    """Demo data: hosts siti and rina, admin, five products, four vouchers, three schedules today"""
    users = seed(db_session, today=datetime.now())
    ids = {name: user.id for name, user in users.items()}
    schedules = db_session.query(Schedule).order_by(Schedule.scheduled_at.asc()).all()
    return {
        "user_ids": ids,
        "siti_schedule_ids": [s.id for s in schedules if s.host_id == ids["siti"]],
        "rina_schedule_ids": [s.id for s in schedules if s.host_id == ids["rina"]],
    }


@pytest.fixture
def app(database):
    return create_app(database)


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


def login(client, username: str, password: str = DEMO_PASSWORD) -> str:
    response = client.post("/api/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["data"]["token"]


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def host_headers(client, seeded):
    return bearer(login(client, "siti"))


@pytest.fixture
def other_host_headers(client, seeded):
    return bearer(login(client, "rina"))


@pytest.fixture
def admin_headers(client, seeded):
    return bearer(login(client, "admin"))
