import logging
from dataclasses import dataclass
from typing import Union

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stockledger.models.product import Product, utcnow
from stockledger.models.stock_movement import MovementType, StockMovement
from stockledger.repositories.movement_repo import MovementRepository
from stockledger.repositories.product_repo import ProductRepository
from stockledger.schemas.product_schema import ProductCreate
from stockledger.services.errors import (
    DuplicateSku,
    InvalidQuantity,
    NegativeStockResult,
    ProductNotFound,
    StockException,
    StockValidationError,
)
from stockledger.utils.transactions import fresh_transaction, product_lock, sku_lock

log = logging.getLogger("stockledger.stock")

INITIAL_STOCK_NOTE = "Initial stock"
MAX_NOTES_LENGTH = 500


@dataclass
class StockChange:
    product: Product
    movement: StockMovement


class StockService:
    """
    The only writer of products and the ledger.

    Each public method owns its transaction: anything already open on the
    session is committed first, and the write commits before the method
    returns. Failures leave both tables untouched.
    """

    def __init__(self, db: Session):
        self.db = db
        self.products = ProductRepository(db)
        self.movements = MovementRepository(db)

    def create_product(self, payload: Union[ProductCreate, dict]) -> Product:
        if not isinstance(payload, ProductCreate):
            try:
                payload = ProductCreate.model_validate(payload)
            except ValidationError as e:
                raise StockValidationError(str(e)) from None

        try:
            with sku_lock(payload.sku), fresh_transaction(self.db):
                if self.products.get_by_sku(payload.sku) is not None:
                    raise DuplicateSku(payload.sku)
                now = utcnow()
                product = self.products.add(
                    Product(
                        name=payload.name,
                        description=payload.description,
                        sku=payload.sku,
                        price=payload.price,
                        stock_quantity=payload.initial_stock,
                        reorder_level=payload.reorder_level,
                        is_active=True,
                        created_at=now,
                        updated_at=now,
                    )
                )
                if payload.initial_stock > 0:
                    self.movements.append(
                        product.id,
                        MovementType.STOCK_IN,
                        payload.initial_stock,
                        INITIAL_STOCK_NOTE,
                        now,
                    )
        except IntegrityError:
            # unique index caught a writer that bypassed the SKU lock
            raise DuplicateSku(payload.sku) from None
        except StockException as e:
            log.warning("create_product sku=%s rejected: %s", payload.sku, e.message)
            raise

        log.info(
            "Created product id=%s sku=%s initial_stock=%d",
            product.id,
            payload.sku,
            payload.initial_stock,
        )
        return product

    def apply_movement(
        self, product_id: int, movement_type, quantity: int, notes: str = ""
    ) -> StockChange:
        """
        Validate and apply one movement to a product.

        Checks run in order: product exists and is active, movement type is one
        of the three tags, StockIn/StockOut quantity is positive, notes fit, the
        resulting level is not negative. The ledger entry records the requested
        type, quantity and notes, not the computed delta.
        """
        notes = notes or ""
        try:
            with product_lock(product_id), fresh_transaction(self.db):
                product = self.products.get_active(product_id, for_update=True)
                if product is None:
                    raise ProductNotFound(product_id)

                mtype = MovementType.parse(movement_type)

                if isinstance(quantity, bool) or not isinstance(quantity, int):
                    raise InvalidQuantity(f"Quantity must be a whole number, got {quantity!r}")
                if mtype.is_delta and quantity <= 0:
                    raise InvalidQuantity(
                        f"Quantity for {mtype.value} must be greater than zero."
                    )
                if len(notes) > MAX_NOTES_LENGTH:
                    raise StockValidationError(
                        f"Notes must be at most {MAX_NOTES_LENGTH} characters."
                    )

                old_quantity = product.stock_quantity
                new_quantity = mtype.apply(old_quantity, quantity)
                if new_quantity < 0:
                    raise NegativeStockResult(old_quantity, new_quantity)

                now = utcnow()
                product.stock_quantity = new_quantity
                product.updated_at = now
                movement = self.movements.append(product.id, mtype, quantity, notes, now)
        except StockException as e:
            log.warning(
                "Movement on product %s rejected (%s): %s", product_id, e.code, e.message
            )
            raise

        log.info(
            "Product %s %s qty=%d stock %d -> %d",
            product_id,
            mtype.value,
            quantity,
            old_quantity,
            new_quantity,
        )
        return StockChange(product=product, movement=movement)

    def deactivate_product(self, product_id: int) -> Product:
        """Soft delete. The product leaves every catalog view; its ledger stays."""
        with product_lock(product_id), fresh_transaction(self.db):
            product = self.products.get_active(product_id, for_update=True)
            if product is None:
                raise ProductNotFound(product_id)
            product.is_active = False
            product.updated_at = utcnow()
        log.info("Deactivated product %s", product_id)
        return product
