"""Application service: Place Order use case.

The only place that coordinates the user directory, the product catalog
and the Order aggregate.  Checks run in a fixed order because the first
failing rule is the one the consumer sees:

1. consumer exists and is a Consumer
2. producer exists and is a Producer
3. per item, in input order: product owned by the producer, unit and
   stock, price still current, then an in-memory stock reduction
4. the Order aggregate validates itself

Only then is stock written and the order stored (reserve-then-commit).
"""

from __future__ import annotations

import structlog

from greenmarket.application.actors import ActorDirectory
from greenmarket.application.compensation import report_compensation
from greenmarket.application.dto import OrderItemSpec
from greenmarket.domain.exceptions import PriceMismatchError
from greenmarket.domain.model.order import Order, OrderItem
from greenmarket.domain.model.value_objects import Price, Quantity, to_decimal
from greenmarket.domain.repository.order_repository import OrderRepository
from greenmarket.domain.repository.user_repository import UserRepository
from greenmarket.domain.service.stock_reservation_service import (
    StockReservationService,
)

logger = structlog.get_logger(__name__)


class PlaceOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        user_repo: UserRepository,
        stock: StockReservationService,
    ) -> None:
        self._order_repo = order_repo
        self._actors = ActorDirectory(user_repo)
        self._stock = stock

    def handle(
        self,
        consumer_id: str,
        producer_id: str,
        items: list[OrderItemSpec],
    ) -> str:
        """Place an order and return its ID."""
        self._actors.require_consumer(consumer_id)
        self._actors.require_producer(producer_id)

        with self._stock.reserve(producer_id, [i.product_id for i in items]) as reservation:
            order_items: list[OrderItem] = []

            for spec in items:
                value = to_decimal(spec.quantity_value, "quantity")
                product = reservation.product(spec.product_id)
                reservation.check_available(product, value, spec.quantity_unit)

                unit_price = to_decimal(spec.unit_price_value, "price")
                currency = (spec.unit_price_currency or "").strip().upper()
                if product.price.value != unit_price or product.price.currency != currency:
                    raise PriceMismatchError(
                        f"Price mismatch for product '{product.name}'. "
                        f"Current price is {product.price}."
                    )

                reservation.reduce(product, value)
                order_items.append(
                    OrderItem.snapshot(
                        product_id=product.id,
                        product_name=product.name,
                        quantity=Quantity(value, spec.quantity_unit),
                        unit_price=Price(unit_price, currency),
                    )
                )

            order = Order.place(consumer_id, producer_id, order_items)

            try:
                reservation.commit()
                self._order_repo.add(order)
            except Exception:
                report_compensation(reservation.rollback(), order_id=order.id)
                raise

        logger.info(
            "order_placed",
            order_id=order.id,
            consumer_id=consumer_id,
            producer_id=producer_id,
            items=len(order.items),
            total_amount=str(order.total_amount),
        )
        return order.id
