from __future__ import annotations

from flask import Blueprint, request, jsonify, g, abort

from models import storage
from models.cart import Cart
from models.product import Product
from models.schemas.cart import CartAddSchema, CartUpdateSchema, CartOutSchema
from utils.decorators import jwt_required

bp = Blueprint("cart", __name__)

cart_add_schema = CartAddSchema()
cart_update_schema = CartUpdateSchema()
cart_out_schema = CartOutSchema()


def find_cart(user_id: int):
    session = storage.get_session()
    return session.query(Cart).filter(Cart.user_id == user_id).first()


def get_or_create_cart(user_id: int) -> Cart:
    cart = find_cart(user_id)
    if cart is None:
        cart = Cart(user_id=user_id)
        storage.new(cart)
        storage.save()
    return cart


def find_cart_item_or_404(user_id: int, product_id: int):
    cart = find_cart(user_id)
    if cart is None:
        abort(404, description="Cart not found")
    item = cart.find_item(product_id)
    if item is None:
        abort(404, description="Product not found in cart")
    return cart, item


@bp.get("/cart")
@jwt_required()
def get_cart():
    """
    Get the current user's cart (created empty on first access)
    ---
    tags:
      - Cart
    security:
      - Bearer: []
    responses:
      200:
        description: OK
    """
    cart = get_or_create_cart(g.current_claims.user_id)
    return jsonify({"data": cart_out_schema.dump(cart)}), 200


@bp.post("/cart")
@jwt_required()
def add_to_cart():
    """
    Add a product to the cart
    ---
    tags:
      - Cart
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
            product_id: { type: integer }
            quantity: { type: integer, minimum: 1 }
    responses:
      200:
        description: Product added
      404:
        description: Product not found
      422:
        description: Validation error
    """
    data = cart_add_schema.load(request.get_json(silent=True) or {})

    product = storage.get(Product, data["product_id"])
    if not product:
        abort(404, description="Product not found")

    cart = get_or_create_cart(g.current_claims.user_id)
    cart.add_product(product, data["quantity"])
    storage.new(cart)
    storage.save()

    return jsonify(
        {
            "message": "Product added to cart successfully",
            "data": cart_out_schema.dump(cart),
        }
    ), 200


@bp.patch("/cart")
@jwt_required()
def update_cart():
    """
    Change the quantity of a product in the cart
    Positive quantity adds, negative reduces, zero removes the product.
    ---
    tags:
      - Cart
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
            product_id: { type: integer }
            quantity: { type: integer, example: -1 }
    responses:
      200:
        description: Cart updated
      404:
        description: Cart not found, or product not in cart
    """
    data = cart_update_schema.load(request.get_json(silent=True) or {})
    cart, item = find_cart_item_or_404(g.current_claims.user_id, data["product_id"])

    delta = data["quantity"]
    cart.change_quantity(item, delta)
    storage.new(cart)
    storage.save()

    if delta == 0:
        message = "Product removed from cart"
    elif delta > 0:
        message = "Product quantity increased"
    else:
        message = "Product quantity decreased"
    return jsonify({"message": message, "data": cart_out_schema.dump(cart)}), 200


@bp.delete("/cart/<int:product_id>")
@jwt_required()
def remove_from_cart(product_id: int):
    """
    Remove a product from the cart
    ---
    tags:
      - Cart
    security:
      - Bearer: []
    parameters:
      - in: path
        name: product_id
        type: integer
        required: true
    responses:
      200:
        description: Product removed
      404:
        description: Cart not found, or product not in cart
    """
    cart, item = find_cart_item_or_404(g.current_claims.user_id, product_id)
    cart.remove_item(item)
    storage.new(cart)
    storage.save()
    return jsonify(
        {
            "message": "Product removed from cart successfully",
            "data": cart_out_schema.dump(cart),
        }
    ), 200
