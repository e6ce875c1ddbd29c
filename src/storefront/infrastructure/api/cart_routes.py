"""Cart endpoints (mounted under ``/api/v1/cart``); every route acts on the caller's cart."""

from __future__ import annotations

from typing import Callable, Optional

from fastapi import APIRouter, Body, Depends

from storefront.application.cart import (
    AddToCartHandler,
    ClearCartHandler,
    GetCartHandler,
    RemoveFromCartHandler,
    UpdateCartItemHandler,
)
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.api.dependencies import Principal, current_user, get_unit_of_work
from storefront.infrastructure.api.schemas import (
    AddToCartIn,
    CartEnvelope,
    CartOut,
    UpdateCartItemIn,
)

router = APIRouter(prefix="/cart", tags=["cart"])

UowFactory = Callable[[], UnitOfWork]


@router.get("/", name="get_cart", response_model=CartEnvelope)
def get_cart(
    principal: Principal = Depends(current_user),
    unit_of_work: UowFactory = Depends(get_unit_of_work),
):
    cart = GetCartHandler(unit_of_work).handle(principal.user_id)
    return CartEnvelope(data=CartOut.model_validate(cart))


@router.post("/", name="add_to_cart", response_model=CartEnvelope)
def add_to_cart(
    body: Optional[AddToCartIn] = Body(None),
    principal: Principal = Depends(current_user),
    unit_of_work: UowFactory = Depends(get_unit_of_work),
):
    """Add a product; a product already in the cart accumulates."""
    body = body or AddToCartIn()
    cart = AddToCartHandler(unit_of_work).handle(
        principal.user_id, body.product_id, body.quantity
    )
    return CartEnvelope(data=CartOut.model_validate(cart))


@router.put("/{product_id}", name="update_cart_item", response_model=CartEnvelope)
def update_cart_item(
    product_id: str,
    body: Optional[UpdateCartItemIn] = Body(None),
    principal: Principal = Depends(current_user),
    unit_of_work: UowFactory = Depends(get_unit_of_work),
):
    quantity = body.quantity if body is not None else None
    cart = UpdateCartItemHandler(unit_of_work).handle(principal.user_id, product_id, quantity)
    return CartEnvelope(data=CartOut.model_validate(cart))


@router.delete("/{product_id}", name="remove_from_cart", response_model=CartEnvelope)
def remove_from_cart(
    product_id: str,
    principal: Principal = Depends(current_user),
    unit_of_work: UowFactory = Depends(get_unit_of_work),
):
    cart = RemoveFromCartHandler(unit_of_work).handle(principal.user_id, product_id)
    return CartEnvelope(data=CartOut.model_validate(cart))


@router.delete("/", name="clear_cart", response_model=CartEnvelope)
def clear_cart(
    principal: Principal = Depends(current_user),
    unit_of_work: UowFactory = Depends(get_unit_of_work),
):
    cart = ClearCartHandler(unit_of_work).handle(principal.user_id)
    return CartEnvelope(data=CartOut.model_validate(cart))
