"""Application service: Add Product use case."""

from __future__ import annotations

from typing import Callable

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork


class AddProductHandler:

    def __init__(self, unit_of_work: Callable[[], UnitOfWork]) -> None:
        self._unit_of_work = unit_of_work

    def handle(
        self,
        name: str,
        price: str,
        stock: int,
        seller_id: str | None = None,
        description: str = "",
        images: list[str] | None = None,
    ) -> Product:
        """Add a new product to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if stock < 0:
            raise ValidationError("Stock cannot be negative")

        with self._unit_of_work() as uow:
            product = Product(
                id=uow.products.next_id(),
                name=name.strip(),
                price=Money.of(price),
                stock=stock,
                images=list(images or []),
                description=description,
                created_by=seller_id,
            )
            uow.products.add(product)
            uow.commit()
        return product
