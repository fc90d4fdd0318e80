from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stockledger.api.errors import install_error_handlers
from stockledger.api.health import router as health_router
from stockledger.api.routes_movements import router as movements_router
from stockledger.api.routes_products import router as products_router
from stockledger.config import settings
from stockledger.db import init_db
from stockledger.jobs import start_scheduler
from stockledger.logging_setup import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    setup_logging(settings.LOG_LEVEL)
    init_db()

    scheduler = None
    if settings.LOW_STOCK_SCAN_SECONDS > 0:
        scheduler = start_scheduler(settings.LOW_STOCK_SCAN_SECONDS)

    try:
        yield
    finally:
        if scheduler is not None:
            scheduler.shutdown(wait=False)


app = FastAPI(title="Stock Ledger", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_error_handlers(app)

app.include_router(health_router, prefix="/api", tags=["health"])

app.include_router(products_router, prefix="/api/products", tags=["products"])

app.include_router(movements_router, prefix="/api/movements", tags=["movements"])


def run():
    import uvicorn

    uvicorn.run("stockledger.main:app", host=settings.APP_HOST, port=settings.APP_PORT)
