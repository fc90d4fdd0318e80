from datetime import datetime
from typing import List, Tuple

from sqlalchemy.orm import Session

from stockledger.models.product import Product
from stockledger.models.stock_movement import MovementType, StockMovement


class MovementRepository:
    """Append-only access to the stock ledger. There is no update or delete."""

    def __init__(self, db: Session):
        self.db = db

    def append(
        self,
        product_id: int,
        movement_type: MovementType,
        quantity: int,
        notes: str,
        created_at: datetime,
    ) -> StockMovement:
        m = StockMovement(
            product_id=product_id,
            movement_type=movement_type,
            quantity=quantity,
            notes=notes or "",
            created_at=created_at,
        )
        self.db.add(m)
        self.db.flush()
        return m

    def list_for_product(self, product_id: int, oldest_first: bool = False) -> List[StockMovement]:
        qry = self.db.query(StockMovement).filter(StockMovement.product_id == product_id)
        if oldest_first:
            qry = qry.order_by(StockMovement.created_at.asc(), StockMovement.id.asc())
        else:
            qry = qry.order_by(StockMovement.created_at.desc(), StockMovement.id.desc())
        return qry.all()

    def list_all_with_names(self, product_id: int = None) -> List[Tuple[StockMovement, str]]:
        """Newest-first movements joined with the owning product's current name."""
        qry = self.db.query(StockMovement, Product.name).join(
            Product, Product.id == StockMovement.product_id
        )
        if product_id is not None:
            qry = qry.filter(StockMovement.product_id == product_id)
        return [
            (m, name)
            for m, name in qry.order_by(
                StockMovement.created_at.desc(), StockMovement.id.desc()
            ).all()
        ]
