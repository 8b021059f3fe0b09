from marshmallow import Schema, fields, validates, ValidationError

from models.schemas.common import Money


class CartAddSchema(Schema):
    product_id = fields.Integer(required=True, strict=True)
    quantity = fields.Integer(required=True, strict=True)

    @validates("quantity")
    def _validate_quantity(self, value, **kwargs):
        if value <= 0:
            raise ValidationError("Quantity must be greater than 0.")


class CartUpdateSchema(Schema):
    # quantity is a delta: positive adds, negative removes, zero drops the line
    product_id = fields.Integer(required=True, strict=True)
    quantity = fields.Integer(required=True, strict=True)


class LineOutSchema(Schema):
    id = fields.Integer(attribute="product_id")
    title = fields.String()
    price = Money()
    quantity = fields.Integer()
    total = Money()
    discount_percentage = Money()
    discounted_total = Money()
    thumbnail = fields.String(allow_none=True)


class CartOutSchema(Schema):
    id = fields.Integer()
    user_id = fields.Integer()
    products = fields.List(fields.Nested(LineOutSchema), attribute="items")
    total = Money()
    discounted_total = Money()
    total_products = fields.Integer()
    total_quantity = fields.Integer()
