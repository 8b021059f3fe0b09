from typing import Optional

from sqlalchemy import (
    Column,
    String,
    Integer,
    Numeric,
    ForeignKey,
    CheckConstraint,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base
from models.pricing import PricedLineMixin, PricedLinesMixin


class Cart(PricedLinesMixin, BaseModel, Base):
    """One cart per user; totals are derived from the lines."""

    __tablename__ = "carts"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)

    items = relationship(
        "CartItem",
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartItem.id",
    )

    def find_item(self, product_id: int) -> Optional["CartItem"]:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    def add_product(self, product, quantity: int) -> "CartItem":
        """Add units of product, merging into an existing line (whose snapshot is kept)."""
        item = self.find_item(product.id)
        if item is not None:
            item.quantity += quantity
            return item
        item = CartItem(
            product_id=product.id,
            title=product.title,
            price=product.price,
            discount_percentage=product.discount_percentage or 0,
            thumbnail=product.thumbnail,
            quantity=quantity,
        )
        self.items.append(item)
        return item

    def change_quantity(self, item: "CartItem", delta: int) -> None:
        """Apply a signed delta; a zero delta or a non-positive result drops the line."""
        if delta == 0 or item.quantity + delta <= 0:
            self.items.remove(item)
        else:
            item.quantity += delta

    def remove_item(self, item: "CartItem") -> None:
        self.items.remove(item)


class CartItem(PricedLineMixin, BaseModel, Base):
    __tablename__ = "cart_items"

    cart_id = Column(Integer, ForeignKey("carts.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    # Snapshot of the product at the time it was put in the cart
    title = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    discount_percentage = Column(Numeric(5, 2), nullable=False, default=0)
    thumbnail = Column(String(512), nullable=True)
    quantity = Column(Integer, nullable=False)

    cart = relationship("Cart", back_populates="items")

    __table_args__ = (
        UniqueConstraint("cart_id", "product_id", name="uq_cart_items_cart_product"),
        CheckConstraint("quantity > 0", name="ck_cart_items_quantity_positive"),
    )
