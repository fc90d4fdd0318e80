from typing import List, Optional

from sqlalchemy.orm import Session

from stockledger.models.product import Product


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, product_id: int, for_update: bool = False) -> Optional[Product]:
        """
        Return the product regardless of its active flag. ``for_update`` takes a
        row lock on backends that support it (SQLite silently omits the clause).
        """
        qry = self.db.query(Product).filter(Product.id == product_id)
        if for_update:
            qry = qry.with_for_update()
        return qry.first()

    def get_active(self, product_id: int, for_update: bool = False) -> Optional[Product]:
        p = self.get(product_id, for_update=for_update)
        if p is None or not p.is_active:
            return None
        return p

    def get_by_sku(self, sku: str) -> Optional[Product]:
        # inactive products still own their SKU
        return self.db.query(Product).filter(Product.sku == sku).first()

    def list_active(self) -> List[Product]:
        return (
            self.db.query(Product)
            .filter(Product.is_active.is_(True))
            .order_by(Product.id)
            .all()
        )

    def list_low_stock(self) -> List[Product]:
        return (
            self.db.query(Product)
            .filter(
                Product.is_active.is_(True),
                Product.stock_quantity <= Product.reorder_level,
            )
            .order_by(Product.id)
            .all()
        )

    def add(self, product: Product) -> Product:
        self.db.add(product)
        self.db.flush()  # assign id
        return product
