"""Application services: consumer orders and producer sales (queries).

Both lists are returned newest first.
"""

from __future__ import annotations

from greenmarket.application.actors import ActorDirectory
from greenmarket.application.dto import OrderDTO
from greenmarket.application.mappers import order_to_dto
from greenmarket.domain.model.order import Order
from greenmarket.domain.repository.order_repository import OrderRepository
from greenmarket.domain.repository.user_repository import UserRepository


def _newest_first(orders: list[Order]) -> list[OrderDTO]:
    ordered = sorted(orders, key=lambda o: o.order_date, reverse=True)
    return [order_to_dto(o) for o in ordered]


class ListConsumerOrdersHandler:

    def __init__(self, order_repo: OrderRepository, user_repo: UserRepository) -> None:
        self._order_repo = order_repo
        self._actors = ActorDirectory(user_repo)

    def handle(self, consumer_id: str) -> list[OrderDTO]:
        self._actors.require_consumer(consumer_id)
        return _newest_first(self._order_repo.get_by_consumer(consumer_id))


class ListProducerSalesHandler:

    def __init__(self, order_repo: OrderRepository, user_repo: UserRepository) -> None:
        self._order_repo = order_repo
        self._actors = ActorDirectory(user_repo)

    def handle(self, producer_id: str) -> list[OrderDTO]:
        self._actors.require_producer(producer_id)
        return _newest_first(self._order_repo.get_by_producer(producer_id))
