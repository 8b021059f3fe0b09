from marshmallow import Schema, fields, validate

from models.order import OrderStatus, PaymentType
from models.schemas.cart import LineOutSchema
from models.schemas.common import Money, non_blank


class OrderLineSchema(Schema):
    product_id = fields.Integer(required=True, strict=True)
    quantity = fields.Integer(
        required=True,
        strict=True,
        validate=validate.Range(min=1, error="Quantity must be greater than 0."),
    )


class PaymentMethodSchema(Schema):
    payment_type = fields.String(
        required=True,
        validate=validate.OneOf([p.value for p in PaymentType]),
    )
    provider = fields.String(required=True, validate=non_blank)


class OrderCreateSchema(Schema):
    products = fields.List(
        fields.Nested(OrderLineSchema),
        required=True,
        validate=validate.Length(min=1, error="Order must contain at least one product."),
    )
    payment_method = fields.Nested(PaymentMethodSchema, required=True)


class OrderOutSchema(Schema):
    id = fields.Integer()
    user_id = fields.Integer()
    products = fields.List(fields.Nested(LineOutSchema), attribute="items")
    total = Money()
    discounted_total = Money()
    total_products = fields.Integer()
    total_quantity = fields.Integer()
    status = fields.Method("get_status")
    payment_method = fields.Dict()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()

    def get_status(self, obj):
        status = obj.status
        return status.value if isinstance(status, OrderStatus) else status
