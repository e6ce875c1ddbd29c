"""Order endpoints (mounted under ``/api/v1/order``)."""

from __future__ import annotations

from typing import Callable, Optional

from fastapi import APIRouter, Body, Depends

from storefront.application.list_orders import ListSellerOrdersHandler, ListUserOrdersHandler
from storefront.application.mark_order_delivered import MarkOrderDeliveredHandler
from storefront.application.mark_order_paid import MarkOrderPaidHandler
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.api.dependencies import (
    Principal,
    current_seller,
    current_staff,
    current_user,
    get_unit_of_work,
)
from storefront.infrastructure.api.schemas import (
    MarkPaidIn,
    OrderEnvelope,
    OrderListEnvelope,
    OrderOut,
    PlacedOrderEnvelope,
    PlaceOrderIn,
    SellerOrderListEnvelope,
    SellerOrderOut,
)

router = APIRouter(prefix="/order", tags=["orders"])

UowFactory = Callable[[], UnitOfWork]


@router.post("/", name="place_order", response_model=PlacedOrderEnvelope, status_code=201)
def place_order(
    body: Optional[PlaceOrderIn] = Body(None),
    principal: Principal = Depends(current_user),
    unit_of_work: UowFactory = Depends(get_unit_of_work),
):
    """Place an order for the caller; stock is reserved atomically."""
    handler = PlaceOrderHandler(unit_of_work)
    placed = handler.handle(principal.user_id, (body or PlaceOrderIn()).to_request())
    return PlacedOrderEnvelope(
        data=OrderOut.model_validate(placed.order),
        order_number=placed.order_number,
    )


@router.get("/user", name="list_user_orders", response_model=OrderListEnvelope)
def list_user_orders(
    principal: Principal = Depends(current_user),
    unit_of_work: UowFactory = Depends(get_unit_of_work),
):
    """All orders of the caller, newest first."""
    orders = ListUserOrdersHandler(unit_of_work).handle(principal.user_id)
    return OrderListEnvelope(data=[OrderOut.model_validate(o) for o in orders])


@router.get("/seller", name="list_seller_orders", response_model=SellerOrderListEnvelope)
def list_seller_orders(
    principal: Principal = Depends(current_seller),
    unit_of_work: UowFactory = Depends(get_unit_of_work),
):
    """Orders containing the caller's products, restricted to those items."""
    views = ListSellerOrdersHandler(unit_of_work).handle(principal.user_id)
    return SellerOrderListEnvelope(
        message=(
            "Orders retrieved successfully"
            if views
            else "No orders found for seller's products"
        ),
        data=[SellerOrderOut.from_dto(view) for view in views],
    )


@router.get("/{order_id}", name="show_order", response_model=OrderEnvelope)
def show_order(
    order_id: str,
    principal: Principal = Depends(current_user),
    unit_of_work: UowFactory = Depends(get_unit_of_work),
):
    order = ShowOrderHandler(unit_of_work).handle(order_id)
    # Other users' orders are reported as missing, not forbidden.
    if order.user_id != principal.user_id and principal.role != "admin":
        raise EntityNotFoundError("Order not found")
    return OrderEnvelope(data=OrderOut.model_validate(order))


@router.put("/{order_id}/pay", name="mark_order_paid", response_model=OrderEnvelope)
def mark_order_paid(
    order_id: str,
    body: Optional[MarkPaidIn] = Body(None),
    principal: Principal = Depends(current_staff),
    unit_of_work: UowFactory = Depends(get_unit_of_work),
):
    payment_result = body.payment_result if body is not None else None
    order = MarkOrderPaidHandler(unit_of_work).handle(
        order_id, payment_result.to_domain() if payment_result else None
    )
    return OrderEnvelope(data=OrderOut.model_validate(order))


@router.put("/{order_id}/deliver", name="mark_order_delivered", response_model=OrderEnvelope)
def mark_order_delivered(
    order_id: str,
    principal: Principal = Depends(current_staff),
    unit_of_work: UowFactory = Depends(get_unit_of_work),
):
    order = MarkOrderDeliveredHandler(unit_of_work).handle(order_id)
    return OrderEnvelope(data=OrderOut.model_validate(order))
