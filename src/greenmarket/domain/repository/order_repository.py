"""Abstract repository for the Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from greenmarket.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def get_by_consumer(self, consumer_id: str) -> list[Order]:
        """Return every order placed by a consumer."""

    @abstractmethod
    def get_by_producer(self, producer_id: str) -> list[Order]:
        """Return every order fulfilled by a producer."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Persist a new order."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist an updated order (compare-and-swap on ``version``).

        Raises ConcurrencyError if the stored version no longer matches
        ``order.version``.
        """
