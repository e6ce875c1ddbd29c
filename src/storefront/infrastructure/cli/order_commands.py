"""CLI commands for orders."""

from __future__ import annotations

import click

from storefront.application.dto import OrderDTO, OrderItemSpec, PlaceOrderRequest
from storefront.application.list_orders import ListSellerOrdersHandler, ListUserOrdersHandler
from storefront.application.mark_order_delivered import MarkOrderDeliveredHandler
from storefront.application.mark_order_paid import MarkOrderPaidHandler
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.value_objects import PaymentMethod, PaymentResult
from storefront.infrastructure.bootstrap import unit_of_work_factory


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'productId:3,productId:1' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(OrderItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"{dto.order_number}  id={dto.id}  (status={dto.status})")
    click.echo(f"User:     {dto.user_id}")
    click.echo(f"Created:  {dto.created_at.isoformat()}")
    click.echo(f"Payment:  {dto.payment_method}  paid={'yes' if dto.is_paid else 'no'}")
    click.echo(f"Delivery: {'delivered' if dto.is_delivered else 'pending'}")
    address = dto.shipping_address
    click.echo(
        f"Ship to:  {address['street']}, {address['city']}, {address['state']} "
        f"{address['zip']}, {address['country']}"
    )
    click.echo()

    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        line_total = item.price * item.quantity
        click.echo(
            f"  {item.name:<20} {item.quantity:>5} {item.price:>10.2f} {line_total:>10.2f}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Items':<27} {dto.items_price:>20.2f}")
    click.echo(f"  {'Tax':<27} {dto.tax_price:>20.2f}")
    click.echo(f"  {'Shipping':<27} {dto.shipping_price:>20.2f}")
    click.echo(f"  {'Order Total':<27} {dto.total_price:>20.2f}")


def _display_summary(orders: list[OrderDTO]) -> None:
    click.echo(f"{'Order':<14} {'Status':<12} {'Paid':<5} {'Total':>10}  Created")
    click.echo("-" * 70)
    for dto in orders:
        click.echo(
            f"{dto.order_number:<14} {dto.status:<12} {'yes' if dto.is_paid else 'no':<5} "
            f"{dto.total_price:>10.2f}  {dto.created_at.isoformat()}"
        )


@click.command("place")
@click.option("--user", "user_id", required=True, help="Customer (user id).")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.option(
    "--payment-method",
    required=True,
    type=click.Choice(PaymentMethod.values()),
    help="How the order is paid.",
)
@click.option("--street", required=True)
@click.option("--city", required=True)
@click.option("--state", required=True)
@click.option("--zip", "zip_code", required=True)
@click.option("--country", required=True)
@click.option("--items-price", required=True, help="Items subtotal (e.g. 2000.00).")
@click.option("--tax-price", default=None, help="Tax amount; defaults to 0.")
@click.option("--shipping-price", default=None, help="Shipping amount; defaults to 0.")
def order_place(
    user_id: str,
    items: str,
    payment_method: str,
    street: str,
    city: str,
    state: str,
    zip_code: str,
    country: str,
    items_price: str,
    tax_price: str | None,
    shipping_price: str | None,
) -> None:
    """Place an order (decrements stock atomically)."""
    request = PlaceOrderRequest(
        order_items=_parse_items(items),
        shipping_address={
            "street": street,
            "city": city,
            "state": state,
            "zip": zip_code,
            "country": country,
        },
        payment_method=payment_method,
        items_price=items_price,
        tax_price=tax_price,
        shipping_price=shipping_price,
    )
    handler = PlaceOrderHandler(unit_of_work_factory())

    try:
        placed = handler.handle(user_id, request)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {placed.order_number} placed  (id={placed.order.id})")
    click.echo()
    _display_order(placed.order)


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(order_id: str) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(unit_of_work_factory())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("pay")
@click.option("--id", "order_id", required=True, help="Order ID to mark paid.")
@click.option("--payment-id", default=None, help="Gateway payment reference.")
@click.option("--payment-status", default=None, help="Gateway payment status.")
@click.option("--email", default=None, help="Payer email address.")
def order_pay(
    order_id: str,
    payment_id: str | None,
    payment_status: str | None,
    email: str | None,
) -> None:
    """Record payment for an order."""
    payment_result = None
    if payment_id or payment_status or email:
        payment_result = PaymentResult(
            payment_id=payment_id, status=payment_status, email_address=email
        )
    handler = MarkOrderPaidHandler(unit_of_work_factory())

    try:
        dto = handler.handle(order_id, payment_result)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number} marked paid  (status={dto.status})")


@click.command("deliver")
@click.option("--id", "order_id", required=True, help="Order ID to mark delivered.")
def order_deliver(order_id: str) -> None:
    """Mark an order delivered."""
    handler = MarkOrderDeliveredHandler(unit_of_work_factory())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    paid_note = "" if dto.is_paid else "  (payment still outstanding)"
    click.echo(f"Order {dto.order_number} delivered{paid_note}")


@click.command("list")
@click.option("--user", "user_id", required=True, help="Customer (user id).")
def order_list(user_id: str) -> None:
    """List a user's orders, newest first."""
    orders = ListUserOrdersHandler(unit_of_work_factory()).handle(user_id)

    if not orders:
        click.echo("No orders found.")
        return
    _display_summary(orders)


@click.command("seller")
@click.option("--seller", "seller_id", required=True, help="Seller (user id).")
def order_seller(seller_id: str) -> None:
    """List orders containing a seller's products."""
    views = ListSellerOrdersHandler(unit_of_work_factory()).handle(seller_id)

    if not views:
        click.echo("No orders found for seller's products.")
        return

    for view in views:
        buyer = view.buyer.username if view.buyer else "(unknown user)"
        click.echo(f"{view.order.order_number}  {view.order.status}  buyer={buyer}")
        for item in view.order.items:
            click.echo(f"    {item.name:<20} x{item.quantity:<4} {item.price:>10.2f}")
