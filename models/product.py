from sqlalchemy import (
    Column,
    String,
    Integer,
    Float,
    Numeric,
    Text,
    CheckConstraint,
)

from models.base_model import BaseModel, Base


class Product(BaseModel, Base):
    __tablename__ = "products"

    title = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    category = Column(String(100), nullable=False, index=True)
    price = Column(Numeric(10, 2), nullable=False)
    discount_percentage = Column(Numeric(5, 2), nullable=False, default=0)
    rating = Column(Float, nullable=True)
    stock = Column(Integer, nullable=False, default=0)
    brand = Column(String(255), nullable=True)
    sku = Column(String(64), nullable=True)
    thumbnail = Column(String(512), nullable=True)

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_nonnegative"),
        CheckConstraint(
            "discount_percentage >= 0 AND discount_percentage <= 100",
            name="ck_products_discount_range",
        ),
        CheckConstraint("stock >= 0", name="ck_products_stock_nonnegative"),
    )
