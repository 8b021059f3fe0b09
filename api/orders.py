from __future__ import annotations

from flask import Blueprint, request, jsonify, g, abort

from models import storage
from models.order import Order, OrderItem, OrderStatus, PaymentType
from models.product import Product
from models.schemas.order import OrderCreateSchema, OrderOutSchema
from api.utils.pagination import parse_pagination, page_meta
from utils.decorators import jwt_required

bp = Blueprint("orders", __name__)

order_create_schema = OrderCreateSchema()
order_out_schema = OrderOutSchema()
orders_out_schema = OrderOutSchema(many=True)


def parse_status():
    raw = request.args.get("status")
    if not raw:
        return None
    try:
        return OrderStatus(raw)
    except ValueError:
        abort(400, description="Status must be either 'paid' or 'not paid'")


@bp.post("/orders")
@jwt_required()
def create_order():
    """
    Place an order; it starts as "not paid"
    ---
    tags:
      - Orders
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            products:
              type: array
              items:
                type: object
                properties:
                  product_id: { type: integer }
                  quantity: { type: integer, minimum: 1 }
            payment_method:
              type: object
              properties:
                payment_type:
                  type: string
                  enum: [card, virtual account]
                provider: { type: string, example: mastercard }
    responses:
      201:
        description: Created
      404:
        description: A product does not exist
      422:
        description: Validation error
    """
    data = order_create_schema.load(request.get_json(silent=True) or {})

    order = Order(
        user_id=g.current_claims.user_id,
        status=OrderStatus.NOT_PAID,
        payment_type=PaymentType(data["payment_method"]["payment_type"]),
        payment_provider=data["payment_method"]["provider"],
    )
    for line in data["products"]:
        product = storage.get(Product, line["product_id"])
        if not product:
            abort(404, description=f"Product with ID {line['product_id']} not found")
        order.items.append(
            OrderItem(
                product_id=product.id,
                title=product.title,
                price=product.price,
                discount_percentage=product.discount_percentage or 0,
                thumbnail=product.thumbnail,
                quantity=line["quantity"],
            )
        )

    storage.new(order)
    storage.save()

    return jsonify(
        {
            "message": "Order created successfully",
            "data": order_out_schema.dump(order),
        }
    ), 201


@bp.get("/orders")
@jwt_required()
def list_orders():
    """
    List the current user's orders, newest first
    ---
    tags:
      - Orders
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
        name: status
        type: string
        enum: [paid, not paid]
    responses:
      200:
        description: List of orders
      400:
        description: Invalid pagination or status
    """
    session = storage.get_session()
    page, limit = parse_pagination(default_limit=10)
    status = parse_status()

    query = session.query(Order).filter(Order.user_id == g.current_claims.user_id)
    if status is not None:
        query = query.filter(Order.status == status)

    total = query.count()
    rows = (
        query.order_by(Order.created_at.desc(), Order.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return jsonify(
        {
            "data": orders_out_schema.dump(rows),
            "meta": page_meta(page, limit, total),
        }
    )
