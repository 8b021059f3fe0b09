import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Query, Session

from models import storage
from models.product import Product
from services.errors import StorageUnavailableError


def database_down(*args, **kwargs):
    raise OperationalError("SELECT 1", {}, Exception("unable to open database file"))


def test_get_maps_unreachable_database(monkeypatch):
    monkeypatch.setattr(Session, "get", database_down)
    with pytest.raises(StorageUnavailableError):
        storage.get(Product, 1)


def test_save_maps_unreachable_database(monkeypatch):
    monkeypatch.setattr(Session, "commit", database_down)
    with pytest.raises(StorageUnavailableError):
        storage.save()


def test_get_ignores_unknown_classes():
    assert storage.get(object, 1) is None


@pytest.mark.parametrize(
    "target, attr, path",
    [
        (Session, "get", "/api/v1/products/1"),
        (Query, "count", "/api/v1/products"),
    ],
)
def test_read_failure_returns_503(client, auth_headers, monkeypatch, target, attr, path):
    monkeypatch.setattr(target, attr, database_down)
    resp = client.get(path, headers=auth_headers)
    assert resp.status_code == 503
    assert resp.get_json()["error"] == "STORAGE_UNAVAILABLE"
