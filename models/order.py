from enum import Enum

from sqlalchemy import (
    Column,
    String,
    Integer,
    Numeric,
    ForeignKey,
    CheckConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.types import Enum as SAEnum

from models.base_model import BaseModel, Base
from models.pricing import PricedLineMixin, PricedLinesMixin


class OrderStatus(str, Enum):
    PAID = "paid"
    NOT_PAID = "not paid"


class PaymentType(str, Enum):
    CARD = "card"
    VIRTUAL_ACCOUNT = "virtual account"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Order(PricedLinesMixin, BaseModel, Base):
    __tablename__ = "orders"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(
        SAEnum(OrderStatus, name="order_status", native_enum=False, values_callable=_enum_values),
        nullable=False,
        default=OrderStatus.NOT_PAID,
    )
    payment_type = Column(
        SAEnum(PaymentType, name="payment_type", native_enum=False, values_callable=_enum_values),
        nullable=False,
    )
    payment_provider = Column(String(100), nullable=False)

    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )

    @property
    def payment_method(self) -> dict:
        return {"payment_type": self.payment_type.value, "provider": self.payment_provider}


class OrderItem(PricedLineMixin, BaseModel, Base):
    __tablename__ = "order_items"

    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="RESTRICT"), nullable=False)
    title = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    discount_percentage = Column(Numeric(5, 2), nullable=False, default=0)
    thumbnail = Column(String(512), nullable=True)
    quantity = Column(Integer, nullable=False)

    order = relationship("Order", back_populates="items")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_order_items_quantity_positive"),
    )
