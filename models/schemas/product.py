from marshmallow import EXCLUDE, Schema, fields, validate, validates, ValidationError, post_load

from models.schemas.common import Money, to_decimal


class ProductSeedSchema(Schema):
    """A product record from a JSON export (camelCase keys)."""

    class Meta:
        unknown = EXCLUDE

    id = fields.Integer(allow_none=True)
    title = fields.String(required=True, validate=validate.Length(min=1, max=255))
    description = fields.String(load_default="")
    category = fields.String(required=True)
    price = fields.Raw(required=True)
    discount_percentage = fields.Raw(load_default=0, data_key="discountPercentage")
    rating = fields.Float(allow_none=True)
    stock = fields.Integer(load_default=0)
    brand = fields.String(allow_none=True)
    sku = fields.String(allow_none=True)
    thumbnail = fields.String(allow_none=True)

    @validates("stock")
    def _validate_stock(self, value, **kwargs):
        if value is not None and value < 0:
            raise ValidationError("stock must be >= 0.")

    @post_load
    def _to_decimals(self, data, **kwargs):
        data["price"] = to_decimal(data["price"])
        discount = to_decimal(data.get("discount_percentage"))
        if discount is not None and discount > 100:
            raise ValidationError({"discountPercentage": ["Must be at most 100."]})
        data["discount_percentage"] = discount
        return data


class ProductOutSchema(Schema):
    id = fields.Integer()
    title = fields.String()
    description = fields.String()
    category = fields.String()
    price = Money()
    discount_percentage = Money()
    rating = fields.Float(allow_none=True)
    stock = fields.Integer()
    brand = fields.String(allow_none=True)
    sku = fields.String(allow_none=True)
    thumbnail = fields.String(allow_none=True)
