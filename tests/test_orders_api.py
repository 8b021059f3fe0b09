import pytest

CARD = {"payment_type": "card", "provider": "mastercard"}


def place(client, headers, lines, payment=CARD):
    return client.post(
        "/api/v1/orders",
        json={"products": lines, "payment_method": payment},
        headers=headers,
    )


def test_create_order(client, auth_headers, products):
    mascara, _, bed = products
    resp = place(
        client,
        auth_headers,
        [{"product_id": mascara.id, "quantity": 3}, {"product_id": bed.id, "quantity": 1}],
    )
    assert resp.status_code == 201
    order = resp.get_json()["data"]
    assert order["status"] == "not paid"
    assert order["payment_method"] == CARD
    assert order["user_id"] == 1
    assert order["total_products"] == 2
    assert order["total_quantity"] == 4
    # 29.97 + 1899.99
    assert order["total"] == "1929.96"
    # 26.973 -> 26.97 ; 1424.9925 -> 1424.99
    assert order["discounted_total"] == "1451.96"
    assert order["created_at"]


def test_create_order_unknown_product(client, auth_headers, products):
    resp = place(client, auth_headers, [{"product_id": 999, "quantity": 1}])
    assert resp.status_code == 404
    assert resp.get_json()["message"] == "Product with ID 999 not found"


@pytest.mark.parametrize(
    "lines, payment",
    [
        ([], CARD),
        ([{"product_id": 1, "quantity": 0}], CARD),
        ([{"product_id": 1}], CARD),
        ([{"product_id": 1, "quantity": 1}], {"payment_type": "cash", "provider": "x"}),
        ([{"product_id": 1, "quantity": 1}], {"payment_type": "card"}),
        ([{"product_id": 1, "quantity": 1}], {"payment_type": "card", "provider": "  "}),
    ],
)
def test_create_order_validation(client, auth_headers, products, lines, payment):
    assert place(client, auth_headers, lines, payment).status_code == 422


def test_missing_payment_method(client, auth_headers, products):
    resp = client.post(
        "/api/v1/orders",
        json={"products": [{"product_id": products[0].id, "quantity": 1}]},
        headers=auth_headers,
    )
    assert resp.status_code == 422
    assert "payment_method" in resp.get_json()["details"]


def test_list_orders_newest_first(client, auth_headers, products):
    for product in products:
        place(client, auth_headers, [{"product_id": product.id, "quantity": 1}])

    body = client.get("/api/v1/orders", headers=auth_headers).get_json()
    titles = [o["products"][0]["title"] for o in body["data"]]
    assert titles == [p.title for p in reversed(products)]
    assert body["meta"] == {"page": 1, "limit": 10, "total": 3, "total_pages": 1}


def test_list_orders_status_filter(client, auth_headers, products):
    place(client, auth_headers, [{"product_id": products[0].id, "quantity": 1}])

    unpaid = client.get("/api/v1/orders", query_string={"status": "not paid"}, headers=auth_headers).get_json()
    paid = client.get("/api/v1/orders?status=paid", headers=auth_headers).get_json()
    assert unpaid["meta"]["total"] == 1
    assert paid["meta"]["total"] == 0

    bad = client.get("/api/v1/orders?status=shipped", headers=auth_headers)
    assert bad.status_code == 400


def test_orders_are_private(client, login, products):
    from models import storage
    from models.user import User
    from utils.security import hash_password

    storage.new(User(username="bob", email="bob@example.com", password_hash=hash_password("hunter2")))
    storage.save()
    storage.close()

    alice = {"Authorization": f"Bearer {login()['access_token']}"}
    place(client, alice, [{"product_id": products[0].id, "quantity": 1}])

    bob_tokens = client.post(
        "/api/v1/auth/login",
        json={"username": "bob", "password": "hunter2", "ip_address": "3.3.3.3", "device_id": "b"},
    ).get_json()
    bob = {"Authorization": f"Bearer {bob_tokens['access_token']}"}
    assert client.get("/api/v1/orders", headers=bob).get_json()["meta"]["total"] == 0
