from decimal import Decimal, InvalidOperation

from marshmallow import ValidationError, fields


def Money(**kwargs):
    """Decimal rendered as a 2-place string, e.g. "19.90"."""
    return fields.Decimal(as_string=True, places=2, **kwargs)


def non_blank(value: str) -> None:
    if value is None or not value.strip():
        raise ValidationError("Must not be blank.")


def to_decimal(value) -> Decimal:
    if value is None:
        return None
    try:
        d = Decimal(str(value))
    except (InvalidOperation, TypeError):
        raise ValidationError("Invalid decimal.")
    if d < 0:
        raise ValidationError("Must be greater than or equal to 0.")
    return d
