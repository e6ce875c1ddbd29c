"""Exception-to-response mapping for the HTTP API.

Every failure response has the shape ``{"success": false, "message": ...}``
plus an error-specific detail field.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from storefront.domain.exceptions import (
    ConflictError,
    DomainException,
    EntityNotFoundError,
    InvalidPaymentMethodError,
    MissingFieldsError,
    OutOfStockError,
    ProductsNotFoundError,
    ValidationError,
)
from storefront.infrastructure.api.dependencies import NotAuthenticated

log = logging.getLogger(__name__)

ERROR_STATUS_CODES: dict[type, int] = {
    ValidationError: 400,
    OutOfStockError: 400,
    ConflictError: 400,
    EntityNotFoundError: 404,
}

# Message for unexpected failures, by route name.
FAILURE_MESSAGES: dict[str, str] = {
    "place_order": "Failed to place order",
    "mark_order_paid": "Failed to update order payment status",
    "mark_order_delivered": "Failed to update order delivery status",
    "list_user_orders": "Failed to fetch orders",
    "list_seller_orders": "Failed to fetch seller orders",
    "show_order": "Failed to fetch order",
    "get_cart": "Failed to fetch cart.",
    "add_to_cart": "Failed to add to cart.",
    "update_cart_item": "Failed to update cart item.",
    "remove_from_cart": "Failed to remove from cart.",
    "clear_cart": "Failed to clear cart.",
}


def status_code_for(exc: DomainException) -> int:
    for exc_type in type(exc).__mro__:
        if exc_type in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[exc_type]
    return 400


def error_detail(exc: DomainException) -> dict:
    if isinstance(exc, MissingFieldsError):
        return {"missingFields": exc.missing_fields}
    if isinstance(exc, InvalidPaymentMethodError):
        return {"validPaymentMethods": exc.valid_payment_methods}
    if isinstance(exc, ProductsNotFoundError):
        return {"missingProducts": exc.missing_product_ids}
    if isinstance(exc, OutOfStockError):
        return {
            "outOfStockItems": [
                {
                    "productId": item.product_id,
                    "name": item.name,
                    "availableStock": item.available_stock,
                    "requestedQuantity": item.requested_quantity,
                }
                for item in exc.items
            ]
        }
    return {}


async def domain_error_handler(request: Request, exc: DomainException) -> JSONResponse:
    """Map DomainException subclasses to client-facing responses."""
    return JSONResponse(
        status_code=status_code_for(exc),
        content={"success": False, "message": str(exc), **error_detail(exc)},
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "message": f"{location}: {message}" if location else message,
        },
    )


async def not_authenticated_handler(request: Request, exc: NotAuthenticated) -> JSONResponse:
    return JSONResponse(status_code=401, content={"success": False, "error": str(exc)})


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    route = request.scope.get("route")
    message = FAILURE_MESSAGES.get(getattr(route, "name", ""), "Internal server error")
    log.error(f"{message}: {exc}", exc_info=exc)

    content: dict = {"success": False, "message": message}
    if request.app.state.settings.is_development:
        content["error"] = str(exc)
    return JSONResponse(status_code=500, content=content)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(NotAuthenticated, not_authenticated_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
