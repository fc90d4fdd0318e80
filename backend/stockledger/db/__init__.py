import importlib
import logging
import os
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from stockledger.config import settings

log = logging.getLogger("stockledger.db")

DATABASE_URL = settings.DATABASE_URL
_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, future=True, echo=False, connect_args=_connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

MODEL_MODULES = [
    "stockledger.models.product",
    "stockledger.models.stock_movement",
]

# (product fields, [(movement type, quantity, notes, days ago)])
DEMO_CATALOG = [
    (
        {
            "name": "Cordless Power Drill",
            "description": "18V cordless drill with 2 batteries and charger",
            "sku": "DRILL-001",
            "price": Decimal("89.99"),
            "stock_quantity": 15,
            "reorder_level": 5,
        },
        [("StockIn", 20, "Initial stock", 7), ("StockOut", 5, "Weekend DIY sale", 3)],
    ),
    (
        {
            "name": "Interior Paint - White",
            "description": "Premium interior latex paint, 1 gallon, white",
            "sku": "PAINT-001",
            "price": Decimal("34.99"),
            "stock_quantity": 3,
            "reorder_level": 10,
        },
        [("StockIn", 10, "Initial stock", 5), ("StockOut", 7, "Contractor bulk order", 2)],
    ),
    (
        {
            "name": "Garden Rake",
            "description": "Heavy-duty steel garden rake with wood handle",
            "sku": "RAKE-001",
            "price": Decimal("24.99"),
            "stock_quantity": 8,
            "reorder_level": 3,
        },
        [("StockIn", 15, "Initial stock", 6), ("StockOut", 7, "Spring gardening season sales", 1)],
    ),
]


def _reset_requested() -> bool:
    return os.environ.get("RESET_DB", "false").lower() in ("1", "true", "yes")


def init_db(reset: bool = None, seed: bool = None):
    """
    Initialize DB schema.

    Behavior:
      - ``reset`` (or the RESET_DB env var when not given) drops and recreates tables.
      - ``seed`` (or settings.SEED_DEMO_DATA when not given) loads the demo
        catalog, only when the products table is empty.
    """
    for mod in MODEL_MODULES:
        importlib.import_module(mod)

    if reset is None:
        reset = _reset_requested()
    if seed is None:
        seed = settings.SEED_DEMO_DATA

    if reset:
        log.info("Resetting database schema")
        Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    if seed:
        with SessionLocal() as s:
            created = seed_demo_catalog(s)
            if created:
                log.info("Seeded %d demo products", created)


def seed_demo_catalog(db) -> int:
    """
    Insert the demo products with a ledger history that replays to their stock.
    Does nothing when any product already exists. Returns the number created.
    """
    from stockledger.models.product import Product
    from stockledger.models.stock_movement import MovementType, StockMovement
    from stockledger.utils.transactions import fresh_transaction

    now = datetime.now(timezone.utc)
    with fresh_transaction(db):
        if db.query(Product.id).first() is not None:
            return 0
        for fields, history in DEMO_CATALOG:
            p = Product(**fields, is_active=True, created_at=now, updated_at=now)
            db.add(p)
            db.flush()
            for type_name, qty, notes, days_ago in history:
                db.add(
                    StockMovement(
                        product_id=p.id,
                        movement_type=MovementType.parse(type_name),
                        quantity=qty,
                        notes=notes,
                        created_at=now - timedelta(days=days_ago),
                    )
                )
    return len(DEMO_CATALOG)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
