from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, Numeric, String
from sqlalchemy.orm import relationship

from stockledger.db import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    description = Column(String(500), nullable=False, default="")
    sku = Column(String(50), unique=True, index=True, nullable=False)
    price = Column(Numeric(18, 2), nullable=False, default=0)
    stock_quantity = Column(Integer, nullable=False, default=0)
    reorder_level = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    # movements outlive deactivation; rows are never deleted through this relation
    movements = relationship(
        "StockMovement", back_populates="product", passive_deletes="all"
    )

    @property
    def is_low_stock(self) -> bool:
        return self.stock_quantity <= self.reorder_level

    @property
    def shortfall(self) -> int:
        return self.reorder_level - self.stock_quantity

    def __repr__(self):
        return f"<Product id={self.id} sku={self.sku} stock={self.stock_quantity}>"
