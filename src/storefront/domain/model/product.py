"""Product aggregate.

Products live independently of orders. Orders only ever read a product's
name, price and first image (as a snapshot) and decrement its stock.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog.

    Invariant: ``stock`` is never negative.
    """

    id: str
    name: str
    price: Money
    stock: int = 0
    images: list[str] = field(default_factory=list)
    description: str = ""
    created_by: str | None = None  # seller id

    @property
    def primary_image(self) -> str:
        return self.images[0] if self.images else ""

    def has_stock_for(self, quantity: int) -> bool:
        return quantity <= self.stock


@dataclass(frozen=True)
class ProductSummary:
    """Product fields shown next to seller orders and cart items."""

    id: str
    name: str
    price: Money
    images: tuple[str, ...] = ()

    @staticmethod
    def of(product: Product) -> ProductSummary:
        return ProductSummary(
            id=product.id,
            name=product.name,
            price=product.price,
            images=tuple(product.images),
        )
