import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from stockledger.services.errors import StockException

log = logging.getLogger("stockledger.api")

STATUS_BY_CODE = {
    "NotFound": 404,
    "DuplicateSku": 400,
    "ValidationError": 400,
    "InvalidMovementType": 400,
    "InvalidQuantity": 400,
    "NegativeStockResult": 400,
    "Busy": 409,
}


def _error(status_code: int, code: str, message: str, details=None) -> JSONResponse:
    body = {"detail": message, "code": code}
    if details:
        body["errors"] = details
    return JSONResponse(status_code=status_code, content=body)


async def stock_exception_handler(request: Request, exc: StockException):
    return _error(STATUS_BY_CODE.get(exc.code, 400), exc.code, exc.message)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details = []
    for err in exc.errors():
        location = [str(part) for part in err.get("loc", []) if part != "body"]
        details.append(
            {
                "field": ".".join(location) if location else "body",
                "message": err.get("msg", "Invalid value"),
            }
        )
    message = "; ".join(f"{d['field']}: {d['message']}" for d in details) or "Validation failed"
    log.info("Rejected request %s %s: %s", request.method, request.url.path, message)
    return _error(400, "ValidationError", message, details)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StockException, stock_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
