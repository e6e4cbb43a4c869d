"""Tests for the order and shipping status update use cases."""

import threading
from datetime import date, timedelta

import pytest

from greenmarket.application.update_order_status import (
    UpdateOrderStatusHandler,
    parse_order_status,
)
from greenmarket.application.update_shipping_status import (
    UpdateShippingStatusHandler,
    parse_shipping_status,
)
from greenmarket.domain.exceptions import (
    ConcurrencyError,
    NotFoundError,
    StateError,
    ValidationError,
)
from greenmarket.domain.model.order import Order, OrderItem, OrderStatus
from greenmarket.domain.model.shipping import ShippingRequest, ShippingStatus
from greenmarket.domain.model.value_objects import Location, Price, Quantity
from greenmarket.infrastructure.persistence.in_memory import (
    InMemoryOrderRepository,
    InMemoryShippingRequestRepository,
    InMemoryUserRepository,
)
from tests.fakes import make_consumer, make_producer


def _order(consumer_id: str, producer_id: str) -> Order:
    item = OrderItem.snapshot("prod-1", "Tomatoes", Quantity.of("1", "kg"), Price.of("2.50", "USD"))
    return Order.place(consumer_id, producer_id, [item])


class _OrdersMeetingAfterLoad(InMemoryOrderRepository):
    """Holds each reader until every party has loaded, while ``rendezvous`` is set."""

    rendezvous: threading.Barrier | None = None

    def get_by_id(self, order_id):
        order = super().get_by_id(order_id)
        if self.rendezvous is not None:
            self.rendezvous.wait(timeout=5)
        return order


class _RequestsMeetingAfterLoad(InMemoryShippingRequestRepository):

    rendezvous: threading.Barrier | None = None

    def get_by_id(self, request_id):
        request = super().get_by_id(request_id)
        if self.rendezvous is not None:
            self.rendezvous.wait(timeout=5)
        return request


def _race(handler, producer_id: str, target_id: str, statuses: list[str]):
    """Run one update per status in parallel; return (successes, conflicts)."""
    successes: list[str] = []
    conflicts: list[ConcurrencyError] = []

    def update(status: str) -> None:
        try:
            successes.append(handler.handle(producer_id, target_id, status))
        except ConcurrencyError as exc:
            conflicts.append(exc)

    threads = [threading.Thread(target=update, args=(s,)) for s in statuses]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    return successes, conflicts


def _shipping(producer_id: str) -> ShippingRequest:
    return ShippingRequest.request(
        producer_id=producer_id,
        product_id="prod-1",
        quantity=Quantity.of("5", "kg"),
        origin=Location("1 Farm Rd", "Springfield", "US"),
        destination=Location("9 Market St", "Shelbyville", "US"),
        required_date=date.today() + timedelta(days=2),
    )


class TestParsing:

    @pytest.mark.parametrize("raw", ["shipped", "SHIPPED", " Shipped "])
    def test_order_status_case_insensitive(self, raw):
        assert parse_order_status(raw) == OrderStatus.SHIPPED

    @pytest.mark.parametrize("raw", ["InProgress", "inprogress", "IN_PROGRESS"])
    def test_shipping_in_progress_spellings(self, raw):
        assert parse_shipping_status(raw) == ShippingStatus.IN_PROGRESS

    def test_unknown_status(self):
        with pytest.raises(ValidationError, match="Unknown order status 'Lost'"):
            parse_order_status("Lost")


class TestUpdateOrderStatus:

    def _setup(self):
        consumer, producer = make_consumer(), make_producer()
        order_repo = InMemoryOrderRepository()
        order = _order(consumer.id, producer.id)
        order_repo.add(order)
        user_repo = InMemoryUserRepository([consumer, producer])
        handler = UpdateOrderStatusHandler(order_repo, user_repo)
        return handler, order_repo, user_repo, order, producer

    def test_moves_forward_and_persists(self):
        handler, order_repo, _, order, producer = self._setup()
        assert handler.handle(producer.id, order.id, "Paid") == "Paid"
        assert order_repo.get_by_id(order.id).status == OrderStatus.PAID

    def test_backward_rejected(self):
        handler, order_repo, _, order, producer = self._setup()
        handler.handle(producer.id, order.id, "Shipped")
        with pytest.raises(StateError):
            handler.handle(producer.id, order.id, "Processing")
        assert order_repo.get_by_id(order.id).status == OrderStatus.SHIPPED

    def test_other_producer_sees_not_found(self):
        handler, _, user_repo, order, _ = self._setup()
        stranger = make_producer("Stranger")
        user_repo.add(stranger)
        with pytest.raises(NotFoundError):
            handler.handle(stranger.id, order.id, "Paid")


class TestUpdateShippingStatus:

    def test_progression(self):
        producer = make_producer()
        shipping_repo = InMemoryShippingRequestRepository()
        request = _shipping(producer.id)
        shipping_repo.add(request)
        handler = UpdateShippingStatusHandler(shipping_repo, InMemoryUserRepository([producer]))

        handler.handle(producer.id, request.id, "Scheduled")
        handler.handle(producer.id, request.id, "Completed")
        with pytest.raises(StateError):
            handler.handle(producer.id, request.id, "Cancelled")
        assert shipping_repo.get_by_id(request.id).status == ShippingStatus.COMPLETED

    def test_unknown_request(self):
        producer = make_producer()
        handler = UpdateShippingStatusHandler(
            InMemoryShippingRequestRepository(), InMemoryUserRepository([producer])
        )
        with pytest.raises(NotFoundError):
            handler.handle(producer.id, "missing", "Scheduled")


class TestConcurrentStatusUpdates:

    def test_only_one_order_transition_wins(self):
        consumer, producer = make_consumer(), make_producer()
        order_repo = _OrdersMeetingAfterLoad()
        order = _order(consumer.id, producer.id)
        order_repo.add(order)
        handler = UpdateOrderStatusHandler(order_repo, InMemoryUserRepository([consumer, producer]))

        order_repo.rendezvous = threading.Barrier(2)
        successes, conflicts = _race(handler, producer.id, order.id, ["Cancelled", "Shipped"])
        order_repo.rendezvous = None

        assert len(successes) == 1
        assert len(conflicts) == 1
        assert "modified concurrently" in str(conflicts[0])
        assert order_repo.get_by_id(order.id).status.value == successes[0]

    def test_cancelled_order_is_not_overwritten(self):
        consumer, producer = make_consumer(), make_producer()
        order_repo = _OrdersMeetingAfterLoad()
        order = _order(consumer.id, producer.id)
        order_repo.add(order)
        handler = UpdateOrderStatusHandler(order_repo, InMemoryUserRepository([consumer, producer]))

        stale = order_repo.get_by_id(order.id)
        handler.handle(producer.id, order.id, "Cancelled")
        stale.update_status(OrderStatus.SHIPPED)
        with pytest.raises(ConcurrencyError):
            order_repo.save(stale)
        assert order_repo.get_by_id(order.id).status == OrderStatus.CANCELLED

    def test_only_one_shipping_transition_wins(self):
        producer = make_producer()
        shipping_repo = _RequestsMeetingAfterLoad()
        request = _shipping(producer.id)
        shipping_repo.add(request)
        handler = UpdateShippingStatusHandler(shipping_repo, InMemoryUserRepository([producer]))

        shipping_repo.rendezvous = threading.Barrier(2)
        successes, conflicts = _race(handler, producer.id, request.id, ["Scheduled", "Cancelled"])
        shipping_repo.rendezvous = None

        assert len(successes) == 1
        assert len(conflicts) == 1
        assert shipping_repo.get_by_id(request.id).status.value == successes[0]
