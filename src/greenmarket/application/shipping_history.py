"""Application services: shipping history and pending transports (queries)."""

from __future__ import annotations

from greenmarket.application.actors import ActorDirectory
from greenmarket.application.dto import ShippingRequestDTO
from greenmarket.application.mappers import shipping_request_to_dto
from greenmarket.domain.model.shipping import ShippingRequest
from greenmarket.domain.repository.product_repository import ProductRepository
from greenmarket.domain.repository.shipping_repository import (
    ShippingRequestRepository,
)
from greenmarket.domain.repository.user_repository import UserRepository

UNKNOWN_PRODUCT = "Unknown Product"


def _with_product_names(
    requests: list[ShippingRequest],
    product_repo: ProductRepository,
) -> list[ShippingRequestDTO]:
    """Join each request with its product name, newest first."""
    names: dict[str, str] = {}
    dtos: list[ShippingRequestDTO] = []
    for request in sorted(requests, key=lambda r: r.created_at, reverse=True):
        if request.product_id not in names:
            product = product_repo.get_by_id(request.product_id)
            names[request.product_id] = product.name if product else UNKNOWN_PRODUCT
        dtos.append(shipping_request_to_dto(request, names[request.product_id]))
    return dtos


class ShippingHistoryHandler:

    def __init__(
        self,
        shipping_repo: ShippingRequestRepository,
        product_repo: ProductRepository,
        user_repo: UserRepository,
    ) -> None:
        self._shipping_repo = shipping_repo
        self._product_repo = product_repo
        self._actors = ActorDirectory(user_repo)

    def handle(self, producer_id: str) -> list[ShippingRequestDTO]:
        self._actors.require_producer(producer_id)
        requests = self._shipping_repo.get_by_producer(producer_id)
        return _with_product_names(requests, self._product_repo)


class PendingShipmentsHandler:
    """Every Pending request across producers, for the logistics side."""

    def __init__(
        self,
        shipping_repo: ShippingRequestRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._shipping_repo = shipping_repo
        self._product_repo = product_repo

    def handle(self) -> list[ShippingRequestDTO]:
        return _with_product_names(self._shipping_repo.get_pending(), self._product_repo)
