"""Domain service: Stock Reservation.

Coordinates the cross-aggregate operation of taking product stock for an
order or a transport request.  It lives in the domain layer because the
"stock never goes negative" rule is a core business rule, not just
orchestration.

Reserve-then-commit:
  Reserve: under the product locks, load working copies and validate
           and reduce them in memory.  Nothing is written, so any
           failure leaves every product untouched.
  Commit:  persist the reduced products (compare-and-swap on version).
           If a write fails, or the dependent aggregate cannot be
           stored afterwards, ``rollback()`` restores the stock and
           reports what it could and could not give back.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from decimal import Decimal

from greenmarket.domain.exceptions import (
    InsufficientStockError,
    NotFoundError,
    UnitMismatchError,
)
from greenmarket.domain.model.product import Product
from greenmarket.domain.repository.product_repository import ProductRepository
from greenmarket.domain.service.product_locks import ProductLocks


@dataclass
class Compensation:
    """Outcome of giving committed stock back."""

    restored: list[tuple[str, Decimal]] = field(default_factory=list)
    failed: list[tuple[str, Decimal, Exception]] = field(default_factory=list)


class StockReservation:
    """Working copies of the products touched by a single request.

    Only valid inside ``StockReservationService.reserve()``; the product
    locks are held for its whole lifetime.
    """

    def __init__(
        self,
        product_repo: ProductRepository,
        producer_id: str,
        product_ids: frozenset[str],
    ) -> None:
        self._product_repo = product_repo
        self._producer_id = producer_id
        self._product_ids = product_ids
        self._products: dict[str, Product] = {}
        self._reduced: dict[str, Decimal] = {}
        self._committed: list[tuple[str, Decimal]] = []
        self._compensation = Compensation()

    # --- Reserve phase --------------------------------------------------------

    def product(self, product_id: str) -> Product:
        """Return the working copy of a product owned by the producer."""
        if product_id not in self._product_ids:
            raise ValueError(f"Product '{product_id}' is not locked by this reservation")

        product = self._products.get(product_id)
        if product is None:
            product = self._product_repo.get_by_id(product_id)
            if product is None or product.producer_id != self._producer_id:
                raise NotFoundError(
                    f"Product with ID {product_id} not found "
                    f"or does not belong to this producer"
                )
            self._products[product_id] = product
        return product

    @staticmethod
    def check_available(product: Product, value: Decimal, unit: str) -> None:
        """Fail if the product's unit differs or its remaining stock is short."""
        if product.quantity.unit != unit.strip().lower():
            raise UnitMismatchError(
                f"Unit mismatch for product '{product.name}': "
                f"stocked in {product.quantity.unit}, requested in {unit}"
            )
        if product.quantity.value < value:
            raise InsufficientStockError(
                f"Insufficient quantity of product '{product.name}' "
                f"(need {value}, have {product.quantity.value} {product.quantity.unit})"
            )

    def reduce(self, product: Product, amount: Decimal) -> None:
        product.reduce_quantity(amount)
        self._reduced[product.id] = self._reduced.get(product.id, Decimal("0")) + amount

    # --- Commit phase ---------------------------------------------------------

    def commit(self) -> None:
        """Persist every reduced product, restoring stock on failure."""
        try:
            for product_id, amount in self._reduced.items():
                product = self._products[product_id]
                self._product_repo.save(product)
                self._committed.append((product_id, amount))
        except Exception:
            self.rollback()
            raise

    def rollback(self) -> Compensation:
        """Give back every committed reduction.

        Each product is reloaded so the restore is applied on top of its
        latest stored version. A product that cannot be restored is
        recorded in the result and the rest are still attempted.
        """
        while self._committed:
            product_id, amount = self._committed.pop()
            try:
                product = self._product_repo.get_by_id(product_id)
                if product is None:
                    raise NotFoundError(f"Product with ID {product_id} not found")
                product.increase_quantity(amount)
                self._product_repo.save(product)
            except Exception as exc:
                self._compensation.failed.append((product_id, amount, exc))
                continue
            self._compensation.restored.append((product_id, amount))
        return self._compensation


class StockReservationService:

    def __init__(self, product_repo: ProductRepository, locks: ProductLocks) -> None:
        self._product_repo = product_repo
        self._locks = locks

    @contextmanager
    def reserve(
        self,
        producer_id: str,
        product_ids: Iterable[str],
    ) -> Iterator[StockReservation]:
        """Lock the products and hand out a reservation over them."""
        ids = frozenset(product_ids)
        with self._locks.hold(ids):
            yield StockReservation(self._product_repo, producer_id, ids)
