class StockException(Exception):
    """Base for every failure the stock core reports to its callers.

    ``code`` names the failure kind; the HTTP layer and the tool envelope
    both key off it rather than off the class.
    """

    code = "StockError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ProductNotFound(StockException):
    code = "NotFound"

    def __init__(self, product_id):
        super().__init__(f"Product with ID {product_id} not found")
        self.product_id = product_id


class DuplicateSku(StockException):
    code = "DuplicateSku"

    def __init__(self, sku: str):
        super().__init__(f"Product with SKU '{sku}' already exists.")
        self.sku = sku


class StockValidationError(StockException):
    code = "ValidationError"


class InvalidMovementType(StockException):
    code = "InvalidMovementType"

    def __init__(self, value):
        super().__init__(
            f"Invalid movement type {value!r}. Use 1=StockIn, 2=StockOut, 3=Adjustment"
        )
        self.value = value


class InvalidQuantity(StockException):
    code = "InvalidQuantity"


class NegativeStockResult(StockException):
    code = "NegativeStockResult"

    def __init__(self, current: int, requested: int):
        super().__init__(
            f"Stock quantity cannot be negative (current={current}, result={requested})."
        )
        self.current = current
        self.requested = requested


class StockBusyError(StockException):
    code = "Busy"
