"""Application service: Update Shipping Request Status use case."""

from __future__ import annotations

import structlog

from greenmarket.application.actors import ActorDirectory
from greenmarket.domain.exceptions import NotFoundError, ValidationError
from greenmarket.domain.model.shipping import ShippingStatus
from greenmarket.domain.repository.shipping_repository import (
    ShippingRequestRepository,
)
from greenmarket.domain.repository.user_repository import UserRepository

logger = structlog.get_logger(__name__)


def parse_shipping_status(raw: str) -> ShippingStatus:
    wanted = (raw or "").strip().lower().replace("_", "")
    for status in ShippingStatus:
        if wanted in (status.value.lower(), status.name.lower().replace("_", "")):
            return status
    raise ValidationError(f"Unknown shipping status '{raw}'")


class UpdateShippingStatusHandler:

    def __init__(
        self,
        shipping_repo: ShippingRequestRepository,
        user_repo: UserRepository,
    ) -> None:
        self._shipping_repo = shipping_repo
        self._actors = ActorDirectory(user_repo)

    def handle(self, producer_id: str, request_id: str, new_status: str) -> str:
        self._actors.require_producer(producer_id)
        target = parse_shipping_status(new_status)

        request = self._shipping_repo.get_by_id(request_id)
        if request is None or request.producer_id != producer_id:
            raise NotFoundError(f"Shipping request {request_id} not found")

        previous = request.status
        request.update_status(target)
        self._shipping_repo.save(request)

        logger.info(
            "shipping_status_changed",
            shipping_request_id=request_id,
            previous=previous.value,
            status=request.status.value,
        )
        return request.status.value
