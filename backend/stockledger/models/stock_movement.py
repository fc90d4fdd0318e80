import enum

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from stockledger.db import Base
from stockledger.models.product import utcnow
from stockledger.services.errors import InvalidMovementType


class MovementType(enum.Enum):
    STOCK_IN = "StockIn"
    STOCK_OUT = "StockOut"
    ADJUSTMENT = "Adjustment"

    @property
    def code(self) -> int:
        return _CODES_BY_TYPE[self]

    @property
    def is_delta(self) -> bool:
        return self is not MovementType.ADJUSTMENT

    def apply(self, current: int, quantity: int) -> int:
        """Return the stock level after applying ``quantity`` to ``current``.

        Adjustment carries the absolute resulting level, not a delta.
        """
        if self is MovementType.STOCK_IN:
            return current + quantity
        if self is MovementType.STOCK_OUT:
            return current - quantity
        return quantity

    @classmethod
    def parse(cls, raw) -> "MovementType":
        """
        Turn an external value into a MovementType.

        Accepts a member, the integer codes 1/2/3 (also as numeric strings) or
        the tag name in any case, with or without underscores. Anything else
        raises InvalidMovementType.
        """
        if isinstance(raw, cls):
            return raw
        # bool is an int subclass; True must not read as StockIn
        if isinstance(raw, bool):
            raise InvalidMovementType(raw)
        if isinstance(raw, int):
            try:
                return _TYPES_BY_CODE[raw]
            except KeyError:
                raise InvalidMovementType(raw) from None
        if isinstance(raw, str):
            text = raw.strip()
            if text.lstrip("-").isdigit():
                return cls.parse(int(text))
            key = text.replace("_", "").lower()
            for member in cls:
                if member.value.lower() == key:
                    return member
        raise InvalidMovementType(raw)


_TYPES_BY_CODE = {
    1: MovementType.STOCK_IN,
    2: MovementType.STOCK_OUT,
    3: MovementType.ADJUSTMENT,
}
_CODES_BY_TYPE = {v: k for k, v in _TYPES_BY_CODE.items()}


class StockMovement(Base):
    __tablename__ = "stock_movements"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    movement_type = Column(
        Enum(
            MovementType,
            name="movement_type",
            values_callable=lambda e: [m.value for m in e],
            validate_strings=True,
        ),
        nullable=False,
    )
    # delta for StockIn/StockOut, resulting level for Adjustment
    quantity = Column(Integer, nullable=False)
    notes = Column(String(500), nullable=False, default="")
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    product = relationship("Product", back_populates="movements")

    def __repr__(self):
        return (
            f"<StockMovement id={self.id} product_id={self.product_id} "
            f"type={self.movement_type.value} qty={self.quantity}>"
        )
