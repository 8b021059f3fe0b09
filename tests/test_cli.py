import json

from models import storage
from models.product import Product
from models.user import User
from utils.security import verify_password

USERS = [
    {
        "id": 1,
        "firstName": "Emily",
        "lastName": "Johnson",
        "email": "Emily.Johnson@x.dummyjson.com",
        "username": "emilys",
        "password": "emilyspass",
        "role": "admin",
        "hair": {"color": "Brown"},
    },
    {
        "id": 2,
        "firstName": "Michael",
        "lastName": "Williams",
        "email": "michael.williams@x.dummyjson.com",
        "username": "michaelw",
        "password": "michaelwpass",
    },
]

PRODUCTS = {
    "products": [
        {
            "id": 1,
            "title": "Essence Mascara Lash Princess",
            "description": "Popular mascara.",
            "category": "beauty",
            "price": 9.99,
            "discountPercentage": 7.17,
            "rating": 4.94,
            "stock": 5,
            "tags": ["beauty", "mascara"],
        }
    ]
}


def write_json(tmp_path, name, data):
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_seed_users_and_products(app, tmp_path):
    users = write_json(tmp_path, "users.json", USERS)
    products = write_json(tmp_path, "products.json", PRODUCTS)

    result = app.test_cli_runner().invoke(args=["seed", "--users", users, "--products", products])

    assert result.exit_code == 0, result.output
    assert "Loaded 2 users" in result.output
    assert "Loaded 1 products" in result.output

    session = storage.get_session()
    emily = session.query(User).filter(User.username == "emilys").one()
    assert emily.email == "emily.johnson@x.dummyjson.com"
    assert emily.first_name == "Emily"
    assert emily.role == "admin"
    assert emily.password_hash != "emilyspass"
    assert verify_password("emilyspass", emily.password_hash)

    mascara = session.get(Product, 1)
    assert str(mascara.discount_percentage) == "7.17"


def test_seed_skips_existing_usernames(app, tmp_path):
    users = write_json(tmp_path, "users.json", USERS)
    runner = app.test_cli_runner()
    runner.invoke(args=["seed", "--users", users])

    again = runner.invoke(args=["seed", "--users", users])

    assert "Loaded 0 users" in again.output
    assert storage.get_session().query(User).count() == 2


def test_seeded_user_can_log_in(app, client, tmp_path):
    users = write_json(tmp_path, "users.json", USERS)
    app.test_cli_runner().invoke(args=["seed", "--users", users])
    storage.close()

    resp = client.post(
        "/api/v1/auth/login",
        json={"username": "michaelw", "password": "michaelwpass", "ip_address": "1.1.1.1", "device_id": "d"},
    )
    assert resp.status_code == 200


def test_seed_reports_invalid_records(app, tmp_path):
    users = write_json(tmp_path, "users.json", [{"username": "x"}])
    result = app.test_cli_runner().invoke(args=["seed", "--users", users])
    assert result.exit_code != 0
    assert "user #0" in result.output
