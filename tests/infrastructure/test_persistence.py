"""Tests for the in-memory and JSON repositories."""

import json
from datetime import date, timedelta
from decimal import Decimal

import pytest

from greenmarket.domain.exceptions import (
    ConcurrencyError,
    DuplicateEmailError,
    DuplicateProductError,
)
from greenmarket.domain.model.order import Order, OrderItem, OrderStatus
from greenmarket.domain.model.shipping import ShippingRequest, ShippingStatus
from greenmarket.domain.model.value_objects import Location, Price, Quantity
from greenmarket.infrastructure.persistence.errors import StorageError
from greenmarket.infrastructure.persistence.in_memory import (
    InMemoryOrderRepository,
    InMemoryProductRepository,
    InMemoryShippingRequestRepository,
    InMemoryUserRepository,
)
from greenmarket.infrastructure.persistence.json_order_repository import JsonOrderRepository
from greenmarket.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from greenmarket.infrastructure.persistence.json_shipping_repository import (
    JsonShippingRequestRepository,
)
from greenmarket.infrastructure.persistence.json_user_repository import JsonUserRepository
from tests.fakes import make_consumer, make_producer, make_product


@pytest.fixture(params=["memory", "json"])
def product_repo(request, tmp_path):
    if request.param == "memory":
        return InMemoryProductRepository()
    return JsonProductRepository(tmp_path / "products.json")


@pytest.fixture(params=["memory", "json"])
def user_repo(request, tmp_path):
    if request.param == "memory":
        return InMemoryUserRepository()
    return JsonUserRepository(tmp_path / "users.json")


@pytest.fixture(params=["memory", "json"])
def order_repo(request, tmp_path):
    if request.param == "memory":
        return InMemoryOrderRepository()
    return JsonOrderRepository(tmp_path / "orders.json")


@pytest.fixture(params=["memory", "json"])
def shipping_repo(request, tmp_path):
    if request.param == "memory":
        return InMemoryShippingRequestRepository()
    return JsonShippingRequestRepository(tmp_path / "shipping.json")


def _placed_order() -> Order:
    item = OrderItem.snapshot("p-1", "Tomatoes", Quantity.of("1", "kg"), Price.of("2.50", "USD"))
    return Order.place("cons-1", "prod-1", [item])


def _requested_transport() -> ShippingRequest:
    return ShippingRequest.request(
        producer_id="prod-1",
        product_id="p-1",
        quantity=Quantity.of("20", "kg"),
        origin=Location("1 Farm Rd", "Springfield", "US"),
        destination=Location("9 Market St", "Shelbyville", "US"),
        required_date=date.today() + timedelta(days=1),
    )

class TestProductRepository:

    def test_add_and_get(self, product_repo):
        product = make_product(make_producer())
        product_repo.add(product)
        loaded = product_repo.get_by_id(product.id)
        assert loaded == product
        assert loaded.quantity == Quantity.of("100", "kg")
        assert loaded.price == Price.of("2.50", "USD")

    def test_missing_is_none(self, product_repo):
        assert product_repo.get_by_id("missing") is None

    def test_save_bumps_version(self, product_repo):
        product = make_product(make_producer())
        product_repo.add(product)
        loaded = product_repo.get_by_id(product.id)
        loaded.reduce_quantity(Decimal("1"))
        product_repo.save(loaded)
        assert loaded.version == 1
        assert product_repo.get_by_id(product.id).version == 1

    def test_stale_version_rejected(self, product_repo):
        product = make_product(make_producer())
        product_repo.add(product)
        first = product_repo.get_by_id(product.id)
        second = product_repo.get_by_id(product.id)

        first.reduce_quantity(Decimal("10"))
        product_repo.save(first)
        second.reduce_quantity(Decimal("10"))
        with pytest.raises(ConcurrencyError, match="modified concurrently"):
            product_repo.save(second)
        assert product_repo.get_by_id(product.id).quantity.value == Decimal("90")

    def test_returned_objects_are_copies(self, product_repo):
        product = make_product(make_producer())
        product_repo.add(product)
        loaded = product_repo.get_by_id(product.id)
        loaded.reduce_quantity(Decimal("50"))
        assert product_repo.get_by_id(product.id).quantity.value == Decimal("100")

    def test_by_producer_and_name_lookup(self, product_repo):
        producer = make_producer()
        product_repo.add(make_product(producer, "Tomatoes"))
        product_repo.add(make_product(make_producer(), "Basil"))
        assert [p.name for p in product_repo.get_by_producer(producer.id)] == ["Tomatoes"]
        assert product_repo.exists_by_name_for_producer(" tomatoes ", producer.id)
        assert not product_repo.exists_by_name_for_producer("Basil", producer.id)

    def test_add_rejects_name_taken_by_same_producer(self, product_repo):
        producer = make_producer()
        product_repo.add(make_product(producer, "Tomatoes"))
        with pytest.raises(DuplicateProductError, match="already exists"):
            product_repo.add(make_product(producer, "TOMATOES"))
        product_repo.add(make_product(make_producer(), "Tomatoes"))
        assert len(product_repo.get_by_producer(producer.id)) == 1

    def test_save_rejects_rename_onto_taken_name(self, product_repo):
        producer = make_producer()
        product_repo.add(make_product(producer, "Tomatoes"))
        basil = make_product(producer, "Basil")
        product_repo.add(basil)

        renamed = product_repo.get_by_id(basil.id)
        renamed.name = "tomatoes"
        with pytest.raises(DuplicateProductError):
            product_repo.save(renamed)
        assert product_repo.get_by_id(basil.id).name == "Basil"

    def test_delete(self, product_repo):
        product = make_product(make_producer())
        product_repo.add(product)
        product_repo.delete(product)
        assert product_repo.get_by_id(product.id) is None


class TestVersionedSaves:

    def test_order_save_bumps_version(self, order_repo):
        order_repo.add(_placed_order())
        (order,) = order_repo.get_by_producer("prod-1")
        order.update_status(OrderStatus.PAID)
        order_repo.save(order)
        assert order.version == 1
        assert order_repo.get_by_id(order.id).version == 1

    def test_stale_order_rejected(self, order_repo):
        placed = _placed_order()
        order_repo.add(placed)
        first = order_repo.get_by_id(placed.id)
        second = order_repo.get_by_id(placed.id)

        first.update_status(OrderStatus.CANCELLED)
        order_repo.save(first)
        second.update_status(OrderStatus.SHIPPED)
        with pytest.raises(ConcurrencyError, match="modified concurrently"):
            order_repo.save(second)
        assert order_repo.get_by_id(placed.id).status == OrderStatus.CANCELLED

    def test_stale_shipping_request_rejected(self, shipping_repo):
        requested = _requested_transport()
        shipping_repo.add(requested)
        first = shipping_repo.get_by_id(requested.id)
        second = shipping_repo.get_by_id(requested.id)

        first.update_status(ShippingStatus.COMPLETED)
        shipping_repo.save(first)
        second.update_status(ShippingStatus.SCHEDULED)
        with pytest.raises(ConcurrencyError):
            shipping_repo.save(second)
        assert shipping_repo.get_by_id(requested.id).status == ShippingStatus.COMPLETED


class TestUserRepository:

    def test_lookup_by_email_is_case_insensitive(self, user_repo):
        consumer = make_consumer()
        user_repo.add(consumer)
        assert user_repo.get_by_email(consumer.email.value.upper()) == consumer
        assert user_repo.exists_by_email(consumer.email.value)

    def test_duplicate_email_rejected(self, user_repo):
        consumer = make_consumer()
        user_repo.add(consumer)
        twin = make_producer()
        twin.change_email(consumer.email)
        with pytest.raises(DuplicateEmailError):
            user_repo.add(twin)

    def test_save_updates_profile(self, user_repo):
        producer = make_producer()
        user_repo.add(producer)
        producer.update_profile("New Name", "About", None)
        user_repo.save(producer)
        assert user_repo.get_by_id(producer.id).full_name == "New Name"


class TestJsonFiles:

    def test_order_round_trip_keeps_decimals_and_status(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        item = OrderItem.snapshot("p-1", "Tomatoes", Quantity.of("1.5", "kg"), Price.of("2.50", "USD"))
        order = Order.place("c-1", "prod-1", [item])
        order.update_status(OrderStatus.PAID)
        repo.add(order)

        loaded = JsonOrderRepository(tmp_path / "orders.json").get_by_id(order.id)
        assert loaded.status == OrderStatus.PAID
        assert loaded.total_amount == Decimal("3.750")
        assert loaded.order_date == order.order_date
        assert loaded.items[0].id == item.id

        raw = json.loads((tmp_path / "orders.json").read_text())
        assert raw[0]["items"][0]["quantity"] == "1.5"

    def test_shipping_request_round_trip(self, tmp_path):
        repo = JsonShippingRequestRepository(tmp_path / "shipping.json")
        request = ShippingRequest.request(
            producer_id="prod-1",
            product_id="p-1",
            quantity=Quantity.of("20", "kg"),
            origin=Location("1 Farm Rd", "Springfield", "US"),
            destination=Location("9 Market St", "Shelbyville", "US"),
            required_date=date.today() + timedelta(days=1),
        )
        repo.add(request)
        request.update_status(ShippingStatus.IN_PROGRESS)
        repo.save(request)

        assert repo.get_pending() == []
        loaded = repo.get_by_id(request.id)
        assert loaded.status == ShippingStatus.IN_PROGRESS
        assert loaded.destination == Location("9 Market St", "Shelbyville", "US")
        assert loaded.required_date == request.required_date

    def test_file_is_created_empty(self, tmp_path):
        path = tmp_path / "nested" / "products.json"
        JsonProductRepository(path)
        assert json.loads(path.read_text()) == []

    def test_no_temp_files_left_behind(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.add(make_product(make_producer()))
        assert sorted(p.name for p in tmp_path.iterdir()) == ["products.json"]

    def test_corrupt_file_raises_storage_error(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text("{not json")
        repo = JsonProductRepository(path)
        with pytest.raises(StorageError, match="Cannot read"):
            repo.get_by_id("anything")
