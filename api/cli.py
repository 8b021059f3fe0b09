"""
`flask --app api seed --users users.json --products products.json`

Loads user and product exports (plain JSON arrays, or objects wrapping the
array under "users"/"products"). Plaintext passwords in the export are
hashed with argon2 on the way in; usernames already present are skipped.
"""
import json
import logging

import click
from marshmallow import ValidationError

from models import storage
from models.product import Product
from models.schemas.product import ProductSeedSchema
from models.schemas.user import UserSeedSchema
from models.user import User
from utils.security import hash_password

logger = logging.getLogger(__name__)

user_seed_schema = UserSeedSchema()
product_seed_schema = ProductSeedSchema()


def _read_records(path: str, key: str) -> list:
    with open(path, encoding="utf-8") as fh:
        data = json.load(fh)
    if isinstance(data, dict):
        data = data.get(key, [])
    if not isinstance(data, list):
        raise click.ClickException(f"{path}: expected a JSON array of {key}")
    return data


def seed_users(records: list) -> int:
    session = storage.get_session()
    existing = {name for (name,) in session.query(User.username).all()}
    added = 0
    for index, raw in enumerate(records):
        try:
            data = user_seed_schema.load(raw)
        except ValidationError as err:
            raise click.ClickException(f"user #{index}: {err.messages}")
        if data["username"] in existing:
            continue
        password = data.pop("password")
        storage.new(User(password_hash=hash_password(password), **data))
        existing.add(data["username"])
        added += 1
    storage.save()
    return added


def seed_products(records: list) -> int:
    session = storage.get_session()
    added = 0
    for index, raw in enumerate(records):
        try:
            data = product_seed_schema.load(raw)
        except ValidationError as err:
            raise click.ClickException(f"product #{index}: {err.messages}")
        if data.get("id") is not None and session.get(Product, data["id"]) is not None:
            continue
        if data.get("id") is None:
            data.pop("id", None)
        storage.new(Product(**data))
        added += 1
    storage.save()
    return added


@click.command("seed")
@click.option("--users", "users_path", type=click.Path(exists=True, dir_okay=False), help="JSON file of users")
@click.option("--products", "products_path", type=click.Path(exists=True, dir_okay=False), help="JSON file of products")
@click.option("--reset", is_flag=True, help="Drop and recreate all tables first")
def seed_command(users_path, products_path, reset):
    """Load users and products into the database."""
    if reset:
        storage.reset()
    if users_path:
        count = seed_users(_read_records(users_path, "users"))
        click.echo(f"Loaded {count} users")
    if products_path:
        count = seed_products(_read_records(products_path, "products"))
        click.echo(f"Loaded {count} products")
    logger.info("Seed finished")
