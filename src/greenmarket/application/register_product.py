"""Application service: Register Product use case."""

from __future__ import annotations

from decimal import Decimal

import structlog

from greenmarket.application.actors import ActorDirectory
from greenmarket.domain.model.product import Product, duplicate_name
from greenmarket.domain.model.value_objects import Price, Quantity
from greenmarket.domain.repository.product_repository import ProductRepository
from greenmarket.domain.repository.user_repository import UserRepository

logger = structlog.get_logger(__name__)


class RegisterProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        user_repo: UserRepository,
    ) -> None:
        self._product_repo = product_repo
        self._actors = ActorDirectory(user_repo)

    def handle(
        self,
        producer_id: str,
        name: str,
        description: str,
        quantity_value: str | Decimal,
        quantity_unit: str,
        price_value: str | Decimal,
        price_currency: str,
    ) -> str:
        """Add a product to the producer's catalog and return its ID.

        The early name check gives the usual error order; the repository
        repeats it atomically with the insert.
        """
        self._actors.require_producer(producer_id)

        if self._product_repo.exists_by_name_for_producer(name, producer_id):
            raise duplicate_name(name)

        product = Product.register(
            producer_id=producer_id,
            name=name,
            description=description,
            quantity=Quantity.of(quantity_value, quantity_unit),
            price=Price.of(price_value, price_currency),
        )
        self._product_repo.add(product)

        logger.info(
            "product_registered",
            product_id=product.id,
            producer_id=producer_id,
            name=product.name,
        )
        return product.id
