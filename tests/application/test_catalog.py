"""Tests for the product catalog use cases: register, update, list."""

import threading
from decimal import Decimal

import pytest

from greenmarket.application.products_for_transport import ProductsForTransportHandler
from greenmarket.application.register_product import RegisterProductHandler
from greenmarket.application.update_product import UpdateProductHandler
from greenmarket.domain.exceptions import (
    ActorError,
    ConcurrencyError,
    DuplicateProductError,
    NotFoundError,
    ValidationError,
)
from greenmarket.domain.service.product_locks import ProductLocks
from greenmarket.infrastructure.persistence.in_memory import (
    InMemoryProductRepository,
    InMemoryUserRepository,
)
from tests.fakes import make_consumer, make_producer


class _ProductsMeetingAfterNameCheck(InMemoryProductRepository):
    """Holds each name check until every party has made it, while ``rendezvous`` is set."""

    rendezvous: threading.Barrier | None = None

    def exists_by_name_for_producer(self, name, producer_id):
        taken = super().exists_by_name_for_producer(name, producer_id)
        if self.rendezvous is not None:
            self.rendezvous.wait(timeout=5)
        return taken


def _setup():
    producer = make_producer()
    other = make_producer("Other Farm")
    consumer = make_consumer()
    user_repo = InMemoryUserRepository([producer, other, consumer])
    product_repo = _ProductsMeetingAfterNameCheck()
    locks = ProductLocks(timeout=0.05)
    return (
        RegisterProductHandler(product_repo, user_repo),
        UpdateProductHandler(product_repo, user_repo, locks),
        product_repo,
        locks,
        producer,
        other,
        consumer,
    )


class TestRegisterProduct:

    def test_happy_path(self):
        register, _, product_repo, _, producer, _, _ = _setup()
        product_id = register.handle(producer.id, "Tomatoes", "Vine", "100", "KG", "2.50", "usd")
        product = product_repo.get_by_id(product_id)
        assert product.quantity.unit == "kg"
        assert product.price.currency == "USD"
        assert product.price.value == Decimal("2.50")

    def test_duplicate_name_is_case_insensitive(self):
        register, _, _, _, producer, _, _ = _setup()
        register.handle(producer.id, "Tomatoes", "Vine", "100", "kg", "2.50", "USD")
        with pytest.raises(DuplicateProductError, match="already exists"):
            register.handle(producer.id, "TOMATOES", "Again", "5", "kg", "3", "USD")

    def test_same_name_for_another_producer_is_fine(self):
        register, _, _, _, producer, other, _ = _setup()
        register.handle(producer.id, "Tomatoes", "Vine", "100", "kg", "2.50", "USD")
        register.handle(other.id, "Tomatoes", "Heirloom", "20", "kg", "4", "USD")

    def test_parallel_registrations_of_one_name_keep_one(self):
        register, _, product_repo, _, producer, _, _ = _setup()
        product_repo.rendezvous = threading.Barrier(2)
        registered: list[str] = []
        rejected: list[DuplicateProductError] = []

        def attempt(description: str) -> None:
            try:
                registered.append(
                    register.handle(producer.id, "Tomatoes", description, "10", "kg", "2", "USD")
                )
            except DuplicateProductError as exc:
                rejected.append(exc)

        threads = [threading.Thread(target=attempt, args=(d,)) for d in ("Vine", "Roma")]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        product_repo.rendezvous = None

        assert len(registered) == 1
        assert len(rejected) == 1
        assert [p.id for p in product_repo.get_by_producer(producer.id)] == registered

    def test_consumer_cannot_register(self):
        register, _, _, _, _, _, consumer = _setup()
        with pytest.raises(ActorError):
            register.handle(consumer.id, "Tomatoes", "Vine", "1", "kg", "1", "USD")

    def test_non_numeric_quantity(self):
        register, _, _, _, producer, _, _ = _setup()
        with pytest.raises(ValidationError, match="Invalid quantity"):
            register.handle(producer.id, "Tomatoes", "Vine", "a lot", "kg", "1", "USD")


class TestUpdateProduct:

    def test_replaces_details(self):
        register, update, product_repo, _, producer, _, _ = _setup()
        product_id = register.handle(producer.id, "Tomatoes", "Vine", "100", "kg", "2.50", "USD")
        update.handle(producer.id, product_id, "Tomatoes", "Roma", "80", "kg", "3.00", "USD")
        product = product_repo.get_by_id(product_id)
        assert product.description == "Roma"
        assert product.price.value == Decimal("3.00")
        assert product.version == 1

    def test_other_producers_product_not_found(self):
        register, update, _, _, producer, other, _ = _setup()
        product_id = register.handle(producer.id, "Tomatoes", "Vine", "100", "kg", "2.50", "USD")
        with pytest.raises(NotFoundError):
            update.handle(other.id, product_id, "Mine", "now", "1", "kg", "1", "USD")

    def test_rename_onto_existing_name_rejected(self):
        register, update, _, _, producer, _, _ = _setup()
        register.handle(producer.id, "Tomatoes", "Vine", "100", "kg", "2.50", "USD")
        basil_id = register.handle(producer.id, "Basil", "Green", "10", "bunch", "1", "USD")
        with pytest.raises(DuplicateProductError):
            update.handle(producer.id, basil_id, "tomatoes", "Green", "10", "bunch", "1", "USD")

    def test_keeping_own_name_is_allowed(self):
        register, update, _, _, producer, _, _ = _setup()
        product_id = register.handle(producer.id, "Tomatoes", "Vine", "100", "kg", "2.50", "USD")
        update.handle(producer.id, product_id, "TOMATOES", "Vine", "100", "kg", "2.50", "USD")

    def test_waits_for_product_lock(self):
        register, update, _, locks, producer, _, _ = _setup()
        product_id = register.handle(producer.id, "Tomatoes", "Vine", "100", "kg", "2.50", "USD")
        # locks are not reentrant, so holding one here blocks the handler
        with locks.hold([product_id]):
            with pytest.raises(ConcurrencyError):
                update.handle(producer.id, product_id, "Tomatoes", "Vine", "1", "kg", "1", "USD")


class TestProductsForTransport:

    def test_lists_only_own_products(self):
        register, _, product_repo, _, producer, other, _ = _setup()
        register.handle(producer.id, "Tomatoes", "Vine", "100", "kg", "2.50", "USD")
        register.handle(other.id, "Basil", "Green", "10", "bunch", "1", "USD")
        handler = ProductsForTransportHandler(product_repo, InMemoryUserRepository([producer]))

        products = handler.handle(producer.id)
        assert [(p.name, p.quantity, p.unit) for p in products] == [
            ("Tomatoes", Decimal("100"), "kg")
        ]
