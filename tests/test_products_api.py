import pytest


def test_products_require_authentication(client, products):
    assert client.get("/api/v1/products").status_code == 401


def test_list_products_defaults(client, auth_headers, products):
    resp = client.get("/api/v1/products", headers=auth_headers)
    assert resp.status_code == 200
    body = resp.get_json()
    assert [p["title"] for p in body["data"]] == [p.title for p in products]
    assert body["meta"] == {"page": 1, "limit": 10, "total": 3, "total_pages": 1}
    assert body["data"][0]["price"] == "9.99"


def test_filter_by_category_is_case_insensitive(client, auth_headers, products):
    resp = client.get("/api/v1/products?category=BEAUTY", headers=auth_headers)
    body = resp.get_json()
    assert body["meta"]["total"] == 2
    assert {p["category"] for p in body["data"]} == {"beauty"}


def test_search_matches_title_or_description(client, auth_headers, products):
    by_title = client.get("/api/v1/products?search=mascara", headers=auth_headers).get_json()
    by_description = client.get("/api/v1/products?search=ELEGANT", headers=auth_headers).get_json()

    assert [p["title"] for p in by_title["data"]] == ["Essence Mascara Lash Princess"]
    assert [p["title"] for p in by_description["data"]] == ["Annibale Colombo Bed"]


def test_pagination(client, auth_headers, products):
    body = client.get("/api/v1/products?page=2&limit=2", headers=auth_headers).get_json()
    assert [p["title"] for p in body["data"]] == ["Annibale Colombo Bed"]
    assert body["meta"] == {"page": 2, "limit": 2, "total": 3, "total_pages": 2}


@pytest.mark.parametrize("query", ["page=0", "limit=0", "limit=101", "page=abc"])
def test_invalid_pagination(client, auth_headers, products, query):
    resp = client.get(f"/api/v1/products?{query}", headers=auth_headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "BAD_REQUEST"


def test_get_product(client, auth_headers, products):
    product_id = products[2].id
    resp = client.get(f"/api/v1/products/{product_id}", headers=auth_headers)
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["title"] == "Annibale Colombo Bed"
    assert data["discount_percentage"] == "25.00"


def test_get_missing_product(client, auth_headers, products):
    resp = client.get("/api/v1/products/999", headers=auth_headers)
    assert resp.status_code == 404
    assert resp.get_json()["message"] == "Product not found"


@pytest.mark.parametrize("term, expected", [("%", ["Cotton 100% shirt"]), ("_", ["Snap_back cap"])])
def test_search_treats_wildcards_literally(client, auth_headers, term, expected):
    from decimal import Decimal

    from models import storage
    from models.product import Product

    for title in ("Cotton 100% shirt", "Snap_back cap", "Plain hat"):
        storage.new(Product(title=title, description="", category="tops", price=Decimal("5.00"), stock=1))
    storage.save()
    storage.close()

    body = client.get("/api/v1/products", query_string={"search": term}, headers=auth_headers).get_json()
    assert [p["title"] for p in body["data"]] == expected
