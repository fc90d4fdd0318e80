from datetime import datetime
from typing import Any

from stockledger.models.stock_movement import MovementType
from stockledger.schemas.product_schema import CamelModel


class StockUpdate(CamelModel):
    # left raw: the stock service parses and checks these after the product
    # lookup, so JSON true/1.5 never get coerced into a valid tag or quantity
    movement_type: Any
    quantity: Any
    notes: str = ""


class StockMovementOut(CamelModel):
    id: int
    product_id: int
    product_name: str
    movement_type: MovementType
    quantity: int
    notes: str
    created_at: datetime
