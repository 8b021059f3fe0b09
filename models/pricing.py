"""Money arithmetic shared by cart and order lines."""
from decimal import Decimal, ROUND_HALF_UP
from typing import Tuple

CENT = Decimal("0.01")
HUNDRED = Decimal("100")


def to_money(value) -> Decimal:
    return Decimal(str(value if value is not None else 0)).quantize(CENT, rounding=ROUND_HALF_UP)


def line_totals(price, quantity: int, discount_percentage) -> Tuple[Decimal, Decimal]:
    """Return (total, discounted_total) for `quantity` units, rounded to cents."""
    total = Decimal(str(price)) * quantity
    discount = Decimal(str(discount_percentage or 0))
    discounted = total - total * discount / HUNDRED
    return to_money(total), to_money(discounted)


class PricedLinesMixin:
    """Aggregate totals for a container with an `items` collection of priced lines."""

    @property
    def total(self) -> Decimal:
        return to_money(sum((i.total for i in self.items), Decimal("0")))

    @property
    def discounted_total(self) -> Decimal:
        return to_money(sum((i.discounted_total for i in self.items), Decimal("0")))

    @property
    def total_products(self) -> int:
        return len(self.items)

    @property
    def total_quantity(self) -> int:
        return sum(i.quantity for i in self.items)


class PricedLineMixin:
    """A line with price, quantity and discount_percentage columns."""

    @property
    def total(self) -> Decimal:
        return line_totals(self.price, self.quantity, self.discount_percentage)[0]

    @property
    def discounted_total(self) -> Decimal:
        return line_totals(self.price, self.quantity, self.discount_percentage)[1]
