"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
details change, stock goes down with sales and transport requests and up
again when a failed commit is compensated.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from decimal import Decimal

from greenmarket.domain.exceptions import (
    DuplicateProductError,
    InsufficientStockError,
    InvalidAmountError,
    ValidationError,
)
from greenmarket.domain.model.value_objects import Price, Quantity


@dataclass(eq=False)
class Product:
    """A product in a producer's catalog.

    Invariants:
    - ``quantity.value`` is never negative
    - ``producer_id`` never changes after creation
    - names are unique per producer, case-insensitively (kept by the
      repository)

    ``version`` is owned by the repository: it increments on every
    persisted write and lets ``save`` detect lost updates.
    """

    id: str
    producer_id: str
    name: str
    description: str
    quantity: Quantity
    price: Price
    version: int = 0

    @staticmethod
    def register(
        producer_id: str,
        name: str,
        description: str,
        quantity: Quantity,
        price: Price,
    ) -> Product:
        """Create a new catalog entry, enforcing all invariants."""
        if not producer_id:
            raise ValidationError("Producer ID cannot be empty")
        _require_text(name, "Product name")
        _require_text(description, "Product description")
        if quantity.value <= 0:
            raise ValidationError("Quantity must be greater than 0")
        if price.value <= 0:
            raise ValidationError("Price must be greater than 0")
        return Product(
            id=str(uuid.uuid4()),
            producer_id=producer_id,
            name=name.strip(),
            description=description.strip(),
            quantity=quantity,
            price=price,
        )

    def update_details(
        self,
        name: str,
        description: str,
        quantity: Quantity,
        price: Price,
    ) -> None:
        """Replace the editable details.

        Existing orders are unaffected: they hold price and name snapshots.
        """
        _require_text(name, "Product name")
        _require_text(description, "Product description")
        self.name = name.strip()
        self.description = description.strip()
        self.quantity = quantity
        self.price = price

    def reduce_quantity(self, amount: Decimal) -> None:
        """Take ``amount`` out of stock (sale or transport)."""
        if amount <= 0:
            raise InvalidAmountError("Amount to reduce must be positive")
        if amount > self.quantity.value:
            raise InsufficientStockError(
                f"Insufficient quantity of product '{self.name}' "
                f"(need {amount}, have {self.quantity.value} {self.quantity.unit})"
            )
        self.quantity = self.quantity.reduce(amount)

    def increase_quantity(self, amount: Decimal) -> None:
        if amount <= 0:
            raise InvalidAmountError("Amount to increase must be positive")
        self.quantity = self.quantity.increase(amount)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Product) and other.id == self.id

    def __hash__(self) -> int:
        return hash(self.id)


def duplicate_name(name: str) -> DuplicateProductError:
    return DuplicateProductError(
        f"A product with the name '{name}' already exists for this producer"
    )


def _require_text(value: str, label: str) -> None:
    if not value or not value.strip():
        raise ValidationError(f"{label} cannot be empty")
