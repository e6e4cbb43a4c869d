"""Application service: Solicit Transport use case.

Mirrors order placement for a single product: the requested quantity is
taken out of stock and held for transport instead of sale.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import structlog

from greenmarket.application.actors import ActorDirectory
from greenmarket.application.compensation import report_compensation
from greenmarket.application.dto import LocationSpec
from greenmarket.domain.model.shipping import ShippingRequest
from greenmarket.domain.model.value_objects import Location, Quantity, to_decimal
from greenmarket.domain.repository.shipping_repository import (
    ShippingRequestRepository,
)
from greenmarket.domain.repository.user_repository import UserRepository
from greenmarket.domain.service.stock_reservation_service import (
    StockReservationService,
)

logger = structlog.get_logger(__name__)


class SolicitTransportHandler:

    def __init__(
        self,
        shipping_repo: ShippingRequestRepository,
        user_repo: UserRepository,
        stock: StockReservationService,
    ) -> None:
        self._shipping_repo = shipping_repo
        self._actors = ActorDirectory(user_repo)
        self._stock = stock

    def handle(
        self,
        producer_id: str,
        product_id: str,
        quantity_value: str | Decimal,
        quantity_unit: str,
        origin: LocationSpec,
        destination: LocationSpec,
        required_date: date,
        special_instructions: str | None = None,
    ) -> str:
        """Create a Pending shipping request and return its ID."""
        self._actors.require_producer(producer_id)
        value = to_decimal(quantity_value, "quantity")

        with self._stock.reserve(producer_id, [product_id]) as reservation:
            product = reservation.product(product_id)
            reservation.check_available(product, value, quantity_unit)

            shipping_request = ShippingRequest.request(
                producer_id=producer_id,
                product_id=product_id,
                quantity=Quantity(value, quantity_unit),
                origin=Location(origin.address, origin.city, origin.country),
                destination=Location(
                    destination.address, destination.city, destination.country
                ),
                required_date=required_date,
                special_instructions=special_instructions,
            )

            reservation.reduce(product, value)
            try:
                reservation.commit()
                self._shipping_repo.add(shipping_request)
            except Exception:
                report_compensation(
                    reservation.rollback(), shipping_request_id=shipping_request.id
                )
                raise

        logger.info(
            "transport_requested",
            shipping_request_id=shipping_request.id,
            producer_id=producer_id,
            product_id=product_id,
            quantity=str(shipping_request.quantity),
            required_date=shipping_request.required_date.isoformat(),
        )
        return shipping_request.id
