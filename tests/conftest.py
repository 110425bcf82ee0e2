import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure predictable environment variables for tests before importing the app.
BASE_DIR = Path(__file__).resolve().parents[1]
TEST_DB_PATH = BASE_DIR / "test.db"

if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

os.environ.setdefault("DATABASE_URL", f"sqlite:///{TEST_DB_PATH}")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("APP_TIMEZONE", "UTC")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import arogyamix.main as main  # noqa: E402  (import after env vars are set)
from arogyamix.database import Base, engine  # noqa: E402
from arogyamix.services.cart import cart_store  # noqa: E402

TEST_PASSWORD = "Sup3rSecret"


@pytest.fixture()
def client():
    """Provide a TestClient over freshly created tables and an empty cart store."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    cart_store.clear()

    with TestClient(main.app) as test_client:
        yield test_client


def sign_up_and_in(client, email="asha@example.com", full_name="Asha Rao"):
    client.post(
        "/auth/signup",
        json={"email": email, "password": TEST_PASSWORD, "full_name": full_name},
    )
    response = client.post("/auth/signin", json={"email": email, "password": TEST_PASSWORD})
    token = response.json()["data"]["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def auth_headers(client):
    return sign_up_and_in(client)


@pytest.fixture()
def login(client):
    def _login(email="asha@example.com", full_name="Asha Rao"):
        return sign_up_and_in(client, email=email, full_name=full_name)

    return _login
