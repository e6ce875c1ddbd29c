"""Domain service: seller order view.

Application-side join used by stores that cannot express it as a query:
keeps the orders that reference at least one of the seller's products and
restricts each to those line items.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from storefront.domain.model.order import Order, SellerOrder
from storefront.domain.model.product import Product, ProductSummary
from storefront.domain.model.user import UserSummary


def project_seller_orders(
    orders: Iterable[Order],
    seller_products: list[Product],
    buyers: dict[str, UserSummary],
) -> list[SellerOrder]:
    """Return the seller's view of *orders*, newest first."""
    owned = {p.id: p for p in seller_products}
    if not owned:
        return []

    views: list[SellerOrder] = []
    for order in orders:
        own_items = [item for item in order.items if item.product_id in owned]
        if not own_items:
            continue
        product_ids = dict.fromkeys(item.product_id for item in own_items)
        views.append(
            SellerOrder(
                order=replace(order, items=own_items),
                buyer=buyers.get(order.user_id),
                products=[ProductSummary.of(owned[pid]) for pid in product_ids],
            )
        )

    views.sort(key=lambda view: view.order.created_at, reverse=True)
    return views
