"""Integration tests for the SolicitTransport use case."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from greenmarket.application.dto import LocationSpec
from greenmarket.application.solicit_transport import SolicitTransportHandler
from greenmarket.domain.exceptions import (
    ActorError,
    InsufficientStockError,
    NotFoundError,
    PastRequiredDateError,
    UnitMismatchError,
    ValidationError,
)
from greenmarket.domain.model.shipping import ShippingStatus
from greenmarket.infrastructure.persistence.errors import StorageError
from greenmarket.infrastructure.persistence.in_memory import (
    InMemoryProductRepository,
    InMemoryShippingRequestRepository,
    InMemoryUserRepository,
)
from tests.fakes import (
    FailingShippingRequestRepository,
    make_consumer,
    make_producer,
    make_product,
    make_stock,
)

ORIGIN = LocationSpec("1 Farm Rd", "Springfield", "US")
DESTINATION = LocationSpec("9 Market St", "Shelbyville", "US")


def _soon() -> date:
    return date.today() + timedelta(days=3)


def _setup(shipping_repo=None):
    producer = make_producer()
    product = make_product(producer, "Potatoes", quantity="500")
    user_repo = InMemoryUserRepository([producer])
    product_repo = InMemoryProductRepository([product])
    shipping_repo = shipping_repo or InMemoryShippingRequestRepository()
    handler = SolicitTransportHandler(shipping_repo, user_repo, make_stock(product_repo))
    return handler, shipping_repo, product_repo, producer, product


class TestSolicitTransport:

    def test_creates_pending_request_and_reduces_stock(self):
        handler, shipping_repo, product_repo, producer, product = _setup()
        request_id = handler.handle(
            producer.id, product.id, "200", "kg", ORIGIN, DESTINATION, _soon(),
            special_instructions="Keep dry",
        )

        request = shipping_repo.get_by_id(request_id)
        assert request.status == ShippingStatus.PENDING
        assert request.quantity.value == Decimal("200")
        assert request.destination.city == "Shelbyville"
        assert request.special_instructions == "Keep dry"
        assert product_repo.get_by_id(product.id).quantity.value == Decimal("300")

    def test_past_date_rejected_without_touching_stock(self):
        handler, shipping_repo, product_repo, producer, product = _setup()
        with pytest.raises(PastRequiredDateError):
            handler.handle(
                producer.id, product.id, "10", "kg", ORIGIN, DESTINATION,
                date.today() - timedelta(days=3),
            )
        assert product_repo.get_by_id(product.id).quantity.value == Decimal("500")
        assert shipping_repo.get_by_producer(producer.id) == []

    def test_consumer_cannot_request_transport(self):
        handler, _, _, _, product = _setup()
        consumer = make_consumer()
        with pytest.raises(ActorError, match="Invalid ProducerId"):
            handler.handle(consumer.id, product.id, "1", "kg", ORIGIN, DESTINATION, _soon())

    def test_unknown_product(self):
        handler, _, _, producer, _ = _setup()
        with pytest.raises(NotFoundError):
            handler.handle(producer.id, "missing", "1", "kg", ORIGIN, DESTINATION, _soon())

    def test_unit_mismatch(self):
        handler, _, _, producer, product = _setup()
        with pytest.raises(UnitMismatchError):
            handler.handle(producer.id, product.id, "1", "ton", ORIGIN, DESTINATION, _soon())

    def test_insufficient_stock(self):
        handler, _, _, producer, product = _setup()
        with pytest.raises(InsufficientStockError):
            handler.handle(producer.id, product.id, "501", "kg", ORIGIN, DESTINATION, _soon())

    def test_blank_destination_rejected(self):
        handler, _, _, producer, product = _setup()
        with pytest.raises(ValidationError, match="City cannot be empty"):
            handler.handle(
                producer.id, product.id, "1", "kg", ORIGIN,
                LocationSpec("9 Market St", "", "US"), _soon(),
            )

    def test_write_failure_restores_stock(self):
        handler, _, product_repo, producer, product = _setup(FailingShippingRequestRepository())
        with pytest.raises(StorageError):
            handler.handle(producer.id, product.id, "50", "kg", ORIGIN, DESTINATION, _soon())
        assert product_repo.get_by_id(product.id).quantity.value == Decimal("500")
