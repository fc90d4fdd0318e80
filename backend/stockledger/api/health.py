from datetime import datetime, timezone

from fastapi import APIRouter
from sqlalchemy import text

from stockledger.db import engine
from stockledger.schemas.health_schema import HealthOut

router = APIRouter()


@router.get("/health", response_model=HealthOut, tags=["health"])
def health():
    db_ok = False
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            db_ok = True
    except Exception:
        db_ok = False

    return {
        "status": "healthy" if db_ok else "degraded",
        "timestamp": datetime.now(timezone.utc),
        "db": db_ok,
    }
