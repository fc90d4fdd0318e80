from dataclasses import dataclass
from datetime import datetime
from typing import List

from sqlalchemy.orm import Session

from stockledger.models.product import Product
from stockledger.models.stock_movement import MovementType
from stockledger.repositories.movement_repo import MovementRepository
from stockledger.repositories.product_repo import ProductRepository
from stockledger.services.errors import ProductNotFound


@dataclass(frozen=True)
class MovementView:
    id: int
    product_id: int
    product_name: str
    movement_type: MovementType
    quantity: int
    notes: str
    created_at: datetime


class CatalogService:
    """Read-only projections over the catalog and the ledger."""

    def __init__(self, db: Session):
        self.db = db
        self.products = ProductRepository(db)
        self.movements = MovementRepository(db)

    def list_active(self) -> List[Product]:
        return self.products.list_active()

    def get_by_id(self, product_id: int) -> Product:
        p = self.products.get_active(product_id)
        if p is None:
            raise ProductNotFound(product_id)
        return p

    def low_stock(self) -> List[Product]:
        # every returned product has shortfall >= 0
        return self.products.list_low_stock()

    def movements_for_product(self, product_id: int) -> List[MovementView]:
        return self._views(self.movements.list_all_with_names(product_id=product_id))

    def all_movements(self) -> List[MovementView]:
        return self._views(self.movements.list_all_with_names())

    def history_replays(self, product_id: int) -> bool:
        """True when replaying the ledger oldest-first from 0 gives the current level."""
        product = self.products.get(product_id)
        if product is None:
            raise ProductNotFound(product_id)
        level = 0
        for m in self.movements.list_for_product(product_id, oldest_first=True):
            level = m.movement_type.apply(level, m.quantity)
        return level == product.stock_quantity

    @staticmethod
    def _views(rows) -> List[MovementView]:
        return [
            MovementView(
                id=m.id,
                product_id=m.product_id,
                product_name=name,
                movement_type=m.movement_type,
                quantity=m.quantity,
                notes=m.notes,
                created_at=m.created_at,
            )
            for m, name in rows
        ]
