from __future__ import annotations

from flask import Blueprint, request, jsonify, abort
from sqlalchemy import String, func, or_

from models import storage
from models.product import Product
from models.schemas.product import ProductOutSchema
from api.utils.pagination import parse_pagination, page_meta
from utils.decorators import jwt_required

bp = Blueprint("products", __name__)

product_out_schema = ProductOutSchema()
products_out_schema = ProductOutSchema(many=True)


def apply_filters(query):
    category = request.args.get("category")
    search = request.args.get("search")

    if category:
        query = query.filter(func.lower(Product.category) == category.strip().lower())

    if search:
        term = search.strip().lower()
        # literal substring: % and _ in the term are not wildcards
        query = query.filter(
            or_(
                func.lower(Product.title, type_=String).contains(term, autoescape=True),
                func.lower(Product.description, type_=String).contains(term, autoescape=True),
            )
        )
    return query


@bp.get("/products")
@jwt_required()
def list_products():
    """
    List products with pagination and filters
    ---
    tags:
      - Products
    security:
      - Bearer: []
    parameters:
      - in: query
        name: page
        type: integer
        default: 1
      - in: query
        name: limit
        type: integer
        default: 10
      - in: query
        name: category
        type: string
        description: "Exact category, case-insensitive"
      - in: query
        name: search
        type: string
        description: "Substring of title or description, case-insensitive"
    responses:
      200:
        description: List of products
      400:
        description: Invalid pagination
    """
    session = storage.get_session()
    page, limit = parse_pagination(default_limit=10)

    query = apply_filters(session.query(Product))
    total = query.count()
    rows = (
        query.order_by(Product.id.asc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return jsonify(
        {
            "data": products_out_schema.dump(rows),
            "meta": page_meta(page, limit, total),
        }
    )


@bp.get("/products/<int:product_id>")
@jwt_required()
def get_product(product_id: int):
    """
    Get a single product by id
    ---
    tags:
      - Products
    security:
      - Bearer: []
    parameters:
      - in: path
        name: product_id
        type: integer
        required: true
    responses:
      200:
        description: Product found
      404:
        description: Not found
    """
    product = storage.get(Product, product_id)
    if not product:
        abort(404, description="Product not found")
    return jsonify({"data": product_out_schema.dump(product)})
