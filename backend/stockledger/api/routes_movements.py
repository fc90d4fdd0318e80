from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from stockledger.db import get_db
from stockledger.schemas.movement_schema import StockMovementOut
from stockledger.services.catalog_service import CatalogService

router = APIRouter(tags=["movements"])


@router.get("", response_model=List[StockMovementOut], summary="Get all stock movements")
def all_movements(db: Session = Depends(get_db)):
    return CatalogService(db).all_movements()
