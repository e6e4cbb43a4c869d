"""Abstract repository for the ShippingRequest aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from greenmarket.domain.model.shipping import ShippingRequest


class ShippingRequestRepository(ABC):

    @abstractmethod
    def get_by_id(self, request_id: str) -> ShippingRequest | None:
        """Return a shipping request by its ID, or None if not found."""

    @abstractmethod
    def get_by_producer(self, producer_id: str) -> list[ShippingRequest]:
        """Return every shipping request made by a producer."""

    @abstractmethod
    def get_pending(self) -> list[ShippingRequest]:
        """Return every request still in Pending status."""

    @abstractmethod
    def add(self, request: ShippingRequest) -> None:
        """Persist a new shipping request."""

    @abstractmethod
    def save(self, request: ShippingRequest) -> None:
        """Persist an updated shipping request (compare-and-swap on ``version``)."""
