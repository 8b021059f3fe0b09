import os
import sys
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path

# Point storage at a private in-memory database before any model import
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("APP_ENV", "test")

import pytest  # noqa: E402

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from api import create_app  # noqa: E402
from models import storage  # noqa: E402
from models.product import Product  # noqa: E402
from models.user import User  # noqa: E402
from utils.security import hash_password  # noqa: E402

ALICE_PASSWORD = "secret"
DEVICE = {"ip_address": "1.1.1.1", "device_id": "dev-A"}


class FakeClock:
    """Settable clock for the core components."""

    def __init__(self, start=None):
        self.now = start or datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture(autouse=True)
def fresh_database():
    storage.reset()
    yield
    storage.close()


@pytest.fixture
def app():
    return create_app("testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def alice():
    user = User(
        username="alice",
        email="alice@example.com",
        first_name="Alice",
        last_name="Liddell",
        password_hash=hash_password(ALICE_PASSWORD),
    )
    storage.new(user)
    storage.save()
    return user


@pytest.fixture
def products():
    rows = [
        Product(
            title="Essence Mascara Lash Princess",
            description="Popular mascara known for volumizing and lengthening effects.",
            category="beauty",
            price=Decimal("9.99"),
            discount_percentage=Decimal("10"),
            rating=4.9,
            stock=5,
        ),
        Product(
            title="Eyeshadow Palette with Mirror",
            description="Versatile range of eyeshadow shades.",
            category="beauty",
            price=Decimal("19.99"),
            discount_percentage=Decimal("0"),
            stock=44,
        ),
        Product(
            title="Annibale Colombo Bed",
            description="Luxurious and elegant bed frame.",
            category="furniture",
            price=Decimal("1899.99"),
            discount_percentage=Decimal("25"),
            stock=47,
        ),
    ]
    for row in rows:
        storage.new(row)
    storage.save()
    return rows


@pytest.fixture
def login(client, alice):
    def _login(**overrides):
        body = {"username": "alice", "password": ALICE_PASSWORD, **DEVICE, **overrides}
        resp = client.post("/api/v1/auth/login", json=body)
        assert resp.status_code == 200, resp.get_json()
        return resp.get_json()

    return _login


@pytest.fixture
def auth_headers(login):
    tokens = login()
    return {"Authorization": f"Bearer {tokens['access_token']}"}
