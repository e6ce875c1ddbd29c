"""CLI commands for a user's shopping cart."""

from __future__ import annotations

import click

from storefront.application.cart import (
    AddToCartHandler,
    ClearCartHandler,
    GetCartHandler,
    RemoveFromCartHandler,
    UpdateCartItemHandler,
)
from storefront.application.dto import CartDTO
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import unit_of_work_factory


def _display_cart(cart: CartDTO) -> None:
    if not cart.items:
        click.echo("Cart is empty.")
        return

    click.echo(f"  {'Product':<26} {'Name':<20} {'Qty':>5} {'Price':>10}")
    click.echo(f"  {'-'*64}")
    for item in cart.items:
        if item.product is None:
            click.echo(f"  {item.product_id:<26} {'(no longer listed)':<20} {item.quantity:>5}")
            continue
        click.echo(
            f"  {item.product_id:<26} {item.product.name:<20} "
            f"{item.quantity:>5} {item.product.price:>10.2f}"
        )


@click.command("show")
@click.option("--user", "user_id", required=True, help="Customer (user id).")
def cart_show(user_id: str) -> None:
    """Show a user's cart."""
    _display_cart(GetCartHandler(unit_of_work_factory()).handle(user_id))


@click.command("add")
@click.option("--user", "user_id", required=True, help="Customer (user id).")
@click.option("--product", "product_id", required=True, help="Product ID to add.")
@click.option("--quantity", default=1, show_default=True, type=int, help="Units to add.")
def cart_add(user_id: str, product_id: str, quantity: int) -> None:
    """Add a product to a user's cart."""
    handler = AddToCartHandler(unit_of_work_factory())

    try:
        cart = handler.handle(user_id, product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(cart)


@click.command("update")
@click.option("--user", "user_id", required=True, help="Customer (user id).")
@click.option("--product", "product_id", required=True, help="Product ID in the cart.")
@click.option("--quantity", required=True, type=int, help="New quantity.")
def cart_update(user_id: str, product_id: str, quantity: int) -> None:
    """Change the quantity of a cart item."""
    handler = UpdateCartItemHandler(unit_of_work_factory())

    try:
        cart = handler.handle(user_id, product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(cart)


@click.command("remove")
@click.option("--user", "user_id", required=True, help="Customer (user id).")
@click.option("--product", "product_id", required=True, help="Product ID to remove.")
def cart_remove(user_id: str, product_id: str) -> None:
    """Remove a product from a user's cart."""
    handler = RemoveFromCartHandler(unit_of_work_factory())

    try:
        cart = handler.handle(user_id, product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(cart)


@click.command("clear")
@click.option("--user", "user_id", required=True, help="Customer (user id).")
def cart_clear(user_id: str) -> None:
    """Empty a user's cart."""
    handler = ClearCartHandler(unit_of_work_factory())

    try:
        handler.handle(user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Cart of {user_id} cleared.")
