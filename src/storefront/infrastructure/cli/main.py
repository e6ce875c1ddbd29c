import sys

import click

from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
)
from storefront.infrastructure.cli.order_commands import (
    order_deliver,
    order_list,
    order_pay,
    order_place,
    order_seller,
    order_show,
)
from storefront.infrastructure.cli.product_commands import product_add, product_list
from storefront.infrastructure.config import get_settings
from storefront.infrastructure.logging_config import setup_logging


@click.group()
def cli() -> None:
    """Storefront — order placement and fulfilment"""
    setup_logging(get_settings(), stream=sys.stderr)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def cart() -> None:
    """Manage shopping carts."""


@cli.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8000, show_default=True, type=int)
@click.option("--reload", is_flag=True, help="Restart on code changes.")
def serve(host: str, port: int, reload: bool) -> None:
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run(
        "storefront.infrastructure.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


# Register subcommands
order.add_command(order_deliver)
order.add_command(order_list)
order.add_command(order_pay)
order.add_command(order_place)
order.add_command(order_seller)
order.add_command(order_show)
product.add_command(product_add)
product.add_command(product_list)
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_update)
