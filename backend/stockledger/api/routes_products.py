from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from stockledger.db import get_db
from stockledger.schemas.movement_schema import StockMovementOut, StockUpdate
from stockledger.schemas.product_schema import LowStockProductOut, ProductCreate, ProductOut
from stockledger.services.catalog_service import CatalogService
from stockledger.services.stock_service import StockService

router = APIRouter(tags=["products"])


@router.get("", response_model=List[ProductOut], summary="Get all active products")
def list_products(db: Session = Depends(get_db)):
    return CatalogService(db).list_active()


# declared before /{product_id} so the literal path wins
@router.get(
    "/low-stock",
    response_model=List[LowStockProductOut],
    summary="Get products at or below their reorder level",
)
def list_low_stock(db: Session = Depends(get_db)):
    return CatalogService(db).low_stock()


@router.get("/{product_id}", response_model=ProductOut, summary="Get a product by ID")
def get_product(product_id: int, db: Session = Depends(get_db)):
    return CatalogService(db).get_by_id(product_id)


@router.post(
    "",
    response_model=ProductOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new product",
)
def create_product(payload: ProductCreate, response: Response, db: Session = Depends(get_db)):
    product = StockService(db).create_product(payload)
    response.headers["Location"] = f"/api/products/{product.id}"
    return product


@router.put(
    "/{product_id}/stock",
    response_model=ProductOut,
    summary="Apply a stock movement (StockIn, StockOut or Adjustment)",
)
def update_stock(product_id: int, payload: StockUpdate, db: Session = Depends(get_db)):
    change = StockService(db).apply_movement(
        product_id, payload.movement_type, payload.quantity, payload.notes
    )
    return change.product


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Deactivate a product (its movement history is kept)",
)
def deactivate_product(product_id: int, db: Session = Depends(get_db)):
    StockService(db).deactivate_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{product_id}/movements",
    response_model=List[StockMovementOut],
    summary="Get stock movements for a product, newest first",
)
def product_movements(product_id: int, db: Session = Depends(get_db)):
    return CatalogService(db).movements_for_product(product_id)
