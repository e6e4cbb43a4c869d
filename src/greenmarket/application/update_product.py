"""Application service: Update Product use case."""

from __future__ import annotations

from decimal import Decimal

import structlog

from greenmarket.application.actors import ActorDirectory
from greenmarket.domain.exceptions import NotFoundError
from greenmarket.domain.model.product import duplicate_name
from greenmarket.domain.model.value_objects import Price, Quantity
from greenmarket.domain.repository.product_repository import ProductRepository
from greenmarket.domain.repository.user_repository import UserRepository
from greenmarket.domain.service.product_locks import ProductLocks

logger = structlog.get_logger(__name__)


class UpdateProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        user_repo: UserRepository,
        locks: ProductLocks,
    ) -> None:
        self._product_repo = product_repo
        self._actors = ActorDirectory(user_repo)
        self._locks = locks

    def handle(
        self,
        producer_id: str,
        product_id: str,
        name: str,
        description: str,
        quantity_value: str | Decimal,
        quantity_unit: str,
        price_value: str | Decimal,
        price_currency: str,
    ) -> None:
        """Replace a product's details.

        This does NOT affect any existing orders; they captured a
        price snapshot at creation time.  Runs under the product lock so
        it cannot interleave with a stock reservation.
        """
        self._actors.require_producer(producer_id)

        with self._locks.hold([product_id]):
            product = self._product_repo.get_by_id(product_id)
            if product is None or product.producer_id != producer_id:
                raise NotFoundError(
                    f"Product with ID {product_id} not found "
                    f"or does not belong to this producer"
                )

            renamed = name.strip().lower() != product.name.lower()
            if renamed and self._product_repo.exists_by_name_for_producer(
                name, producer_id
            ):
                raise duplicate_name(name)

            product.update_details(
                name=name,
                description=description,
                quantity=Quantity.of(quantity_value, quantity_unit),
                price=Price.of(price_value, price_currency),
            )
            self._product_repo.save(product)

        logger.info("product_updated", product_id=product_id, producer_id=producer_id)
