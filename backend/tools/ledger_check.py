"""
Audit the stock ledger: for every product, replay its movements and compare
with the stored stock level.

Usage:
    python tools/ledger_check.py            # all products
    python tools/ledger_check.py DRILL-001  # one SKU, with its movements
"""
import os
import sys
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from stockledger.db import SessionLocal, init_db
from stockledger.models.product import Product
from stockledger.services.catalog_service import CatalogService

SKU = sys.argv[1] if len(sys.argv) > 1 else None


def main() -> int:
    init_db(seed=False)
    db = SessionLocal()
    broken = 0
    try:
        catalog = CatalogService(db)
        qry = db.query(Product).order_by(Product.id)
        if SKU:
            qry = qry.filter(Product.sku == SKU)

        print("=== Products ===")
        for p in qry.all():
            ok = catalog.history_replays(p.id)
            broken += 0 if ok else 1
            print(
                {
                    "id": p.id,
                    "sku": p.sku,
                    "active": p.is_active,
                    "stock": p.stock_quantity,
                    "reorder_level": p.reorder_level,
                    "low_stock": p.is_low_stock,
                    "ledger_ok": ok,
                }
            )
            if SKU:
                print(f"\n=== Movements for SKU={SKU} ===")
                for m in catalog.movements_for_product(p.id):
                    print((m.id, m.movement_type.value, m.quantity, m.notes, m.created_at.isoformat()))
    finally:
        db.close()

    print(f"\n{broken} product(s) whose ledger does not replay to their stock")
    return 1 if broken else 0


if __name__ == "__main__":
    sys.exit(main())
