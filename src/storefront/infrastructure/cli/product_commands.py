"""CLI commands for the Product catalog."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import unit_of_work_factory


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Unit price (e.g. 15.00).")
@click.option("--stock", default=0, show_default=True, type=int, help="Units in stock.")
@click.option("--seller", "seller_id", default=None, help="Seller (user id) who owns the product.")
@click.option("--image", "images", multiple=True, help="Image URL; repeat for several.")
@click.option("--description", default="", help="Free-form description.")
def product_add(
    name: str,
    price: str,
    stock: int,
    seller_id: str | None,
    images: tuple[str, ...],
    description: str,
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(unit_of_work_factory())

    try:
        product = handler.handle(
            name=name,
            price=price,
            stock=stock,
            seller_id=seller_id,
            description=description,
            images=list(images),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product {product.id} '{product.name}' added at {product.price} "
        f"({product.stock} in stock)"
    )


@click.command("list")
@click.option("--seller", "seller_id", default=None, help="Only this seller's products.")
def product_list(seller_id: str | None) -> None:
    """List products in the catalog."""
    with unit_of_work_factory()() as uow:
        if seller_id:
            products = uow.products.list_by_seller(seller_id)
        else:
            products = uow.products.list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<26} {'Name':<20} {'Price':>10} {'Stock':>6}")
    click.echo("-" * 65)
    for p in products:
        click.echo(f"{p.id:<26} {p.name:<20} {str(p.price):>10} {p.stock:>6}")
