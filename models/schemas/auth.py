from marshmallow import Schema, fields

from models.schemas.common import non_blank


class LoginSchema(Schema):
    username = fields.String(required=True, validate=non_blank)
    password = fields.String(required=True, load_only=True, validate=non_blank)
    ip_address = fields.String(required=True, validate=non_blank)
    device_id = fields.String(required=True, validate=non_blank)


class RefreshSchema(Schema):
    refresh_token = fields.String(required=True, validate=non_blank)
    ip_address = fields.String(required=True, validate=non_blank)
    device_id = fields.String(required=True, validate=non_blank)


class LogoutSchema(Schema):
    refresh_token = fields.String(required=True, validate=non_blank)
