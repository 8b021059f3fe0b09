from marshmallow import EXCLUDE, Schema, fields, pre_load, validates, ValidationError


def _norm_email(v):
    return v.strip().lower() if isinstance(v, str) else v


class UserSeedSchema(Schema):
    """A user record from a JSON export (camelCase keys, plaintext password)."""

    class Meta:
        unknown = EXCLUDE

    username = fields.String(required=True)
    email = fields.Email(required=True)
    password = fields.String(required=True, load_only=True)
    first_name = fields.String(allow_none=True, data_key="firstName")
    last_name = fields.String(allow_none=True, data_key="lastName")
    role = fields.String(load_default="user")

    @pre_load
    def normalize(self, data, **kwargs):
        if isinstance(data, dict) and "email" in data:
            data = dict(data, email=_norm_email(data["email"]))
        return data

    @validates("username")
    def validate_username(self, value, **kwargs):
        if not value.strip():
            raise ValidationError("username must not be blank.")


class UserOutSchema(Schema):
    id = fields.Integer()
    username = fields.String()
    email = fields.String()
    first_name = fields.String(allow_none=True)
    last_name = fields.String(allow_none=True)
    role = fields.String(allow_none=True)
