"""Application service: Update Order Status use case."""

from __future__ import annotations

import structlog

from greenmarket.application.actors import ActorDirectory
from greenmarket.domain.exceptions import NotFoundError, ValidationError
from greenmarket.domain.model.order import OrderStatus
from greenmarket.domain.repository.order_repository import OrderRepository
from greenmarket.domain.repository.user_repository import UserRepository

logger = structlog.get_logger(__name__)


def parse_order_status(raw: str) -> OrderStatus:
    wanted = (raw or "").strip().lower()
    for status in OrderStatus:
        if wanted in (status.value.lower(), status.name.lower()):
            return status
    raise ValidationError(f"Unknown order status '{raw}'")


class UpdateOrderStatusHandler:

    def __init__(self, order_repo: OrderRepository, user_repo: UserRepository) -> None:
        self._order_repo = order_repo
        self._actors = ActorDirectory(user_repo)

    def handle(self, producer_id: str, order_id: str, new_status: str) -> str:
        """Move one of the producer's orders forward; returns the resulting status.

        A concurrent update of the same order makes ``save`` raise
        ConcurrencyError, so a transition is never reported and then lost.
        """
        self._actors.require_producer(producer_id)
        target = parse_order_status(new_status)

        order = self._order_repo.get_by_id(order_id)
        if order is None or order.producer_id != producer_id:
            raise NotFoundError(f"Order {order_id} not found")

        previous = order.status
        order.update_status(target)
        self._order_repo.save(order)

        logger.info(
            "order_status_changed",
            order_id=order_id,
            previous=previous.value,
            status=order.status.value,
        )
        return order.status.value
