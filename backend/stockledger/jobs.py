import logging

from apscheduler.schedulers.background import BackgroundScheduler

from stockledger.db import SessionLocal
from stockledger.services.catalog_service import CatalogService

log = logging.getLogger("stockledger.jobs")


def scan_low_stock() -> int:
    """Log every active product at or below its reorder level. Returns the count."""
    db = SessionLocal()
    try:
        low = CatalogService(db).low_stock()
        for p in low:
            log.warning(
                "Low stock: %s (%s) has %d, reorder level %d, short by %d",
                p.name,
                p.sku,
                p.stock_quantity,
                p.reorder_level,
                p.shortfall,
            )
        return len(low)
    finally:
        db.close()


def start_scheduler(interval_seconds: int) -> BackgroundScheduler:
    scheduler = BackgroundScheduler()
    scheduler.add_job(scan_low_stock, "interval", seconds=interval_seconds, id="scan_low_stock")
    scheduler.start()
    log.info("Low-stock scan scheduled every %ds", interval_seconds)
    return scheduler
