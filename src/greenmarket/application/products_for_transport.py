"""Application service: Products Available For Transport (query)."""

from __future__ import annotations

from greenmarket.application.actors import ActorDirectory
from greenmarket.application.dto import ProductForTransportDTO
from greenmarket.domain.repository.product_repository import ProductRepository
from greenmarket.domain.repository.user_repository import UserRepository


class ProductsForTransportHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        user_repo: UserRepository,
    ) -> None:
        self._product_repo = product_repo
        self._actors = ActorDirectory(user_repo)

    def handle(self, producer_id: str) -> list[ProductForTransportDTO]:
        self._actors.require_producer(producer_id)
        return [
            ProductForTransportDTO(
                id=p.id,
                name=p.name,
                quantity=p.quantity.value,
                unit=p.quantity.unit,
            )
            for p in self._product_repo.get_by_producer(producer_id)
        ]
