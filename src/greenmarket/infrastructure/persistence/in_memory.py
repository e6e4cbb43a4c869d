"""Thread-safe in-memory repositories.

Each store is a dict guarded by an RLock.  Aggregates are deep-copied on
the way in and on the way out, so callers never share mutable state
with the store and every change goes through ``add``/``save``.
The data lives as long as the process.
"""

from __future__ import annotations

import copy
import threading

from greenmarket.domain.exceptions import ConcurrencyError, DuplicateEmailError
from greenmarket.domain.model.order import Order
from greenmarket.domain.model.product import Product, duplicate_name
from greenmarket.domain.model.shipping import ShippingRequest, ShippingStatus
from greenmarket.domain.model.user import User
from greenmarket.domain.repository.order_repository import OrderRepository
from greenmarket.domain.repository.product_repository import ProductRepository
from greenmarket.domain.repository.shipping_repository import (
    ShippingRequestRepository,
)
from greenmarket.domain.repository.user_repository import UserRepository


class InMemoryUserRepository(UserRepository):

    def __init__(self, users: list[User] | None = None) -> None:
        self._lock = threading.RLock()
        self._store: dict[str, User] = {u.id: copy.deepcopy(u) for u in users or []}

    def get_by_id(self, user_id: str) -> User | None:
        with self._lock:
            return copy.deepcopy(self._store.get(user_id))

    def get_by_email(self, email: str) -> User | None:
        wanted = email.strip().lower()
        with self._lock:
            for user in self._store.values():
                if user.email.value == wanted:
                    return copy.deepcopy(user)
        return None

    def exists_by_email(self, email: str) -> bool:
        return self.get_by_email(email) is not None

    def add(self, user: User) -> None:
        with self._lock:
            if self.exists_by_email(user.email.value):
                raise DuplicateEmailError(f"Email '{user.email}' is already registered")
            self._store[user.id] = copy.deepcopy(user)

    def save(self, user: User) -> None:
        with self._lock:
            self._store[user.id] = copy.deepcopy(user)


class InMemoryProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._lock = threading.RLock()
        self._store: dict[str, Product] = {
            p.id: copy.deepcopy(p) for p in products or []
        }

    def get_by_id(self, product_id: str) -> Product | None:
        with self._lock:
            return copy.deepcopy(self._store.get(product_id))

    def get_by_producer(self, producer_id: str) -> list[Product]:
        with self._lock:
            return [
                copy.deepcopy(p)
                for p in self._store.values()
                if p.producer_id == producer_id
            ]

    def exists_by_name_for_producer(self, name: str, producer_id: str) -> bool:
        wanted = name.strip().lower()
        with self._lock:
            return any(
                p.producer_id == producer_id and p.name.lower() == wanted
                for p in self._store.values()
            )

    def add(self, product: Product) -> None:
        with self._lock:
            self._ensure_unique_name(product)
            self._store[product.id] = copy.deepcopy(product)

    def save(self, product: Product) -> None:
        with self._lock:
            stored = self._store.get(product.id)
            if stored is not None and stored.version != product.version:
                raise ConcurrencyError(
                    f"Product '{product.name}' was modified concurrently, please retry"
                )
            self._ensure_unique_name(product)
            product.version += 1
            self._store[product.id] = copy.deepcopy(product)

    def delete(self, product: Product) -> None:
        with self._lock:
            self._store.pop(product.id, None)

    def _ensure_unique_name(self, product: Product) -> None:
        wanted = product.name.lower()
        for other in self._store.values():
            if (
                other.id != product.id
                and other.producer_id == product.producer_id
                and other.name.lower() == wanted
            ):
                raise duplicate_name(product.name)


class InMemoryOrderRepository(OrderRepository):

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._store: dict[str, Order] = {}

    def get_by_id(self, order_id: str) -> Order | None:
        with self._lock:
            return copy.deepcopy(self._store.get(order_id))

    def get_by_consumer(self, consumer_id: str) -> list[Order]:
        with self._lock:
            return [
                copy.deepcopy(o)
                for o in self._store.values()
                if o.consumer_id == consumer_id
            ]

    def get_by_producer(self, producer_id: str) -> list[Order]:
        with self._lock:
            return [
                copy.deepcopy(o)
                for o in self._store.values()
                if o.producer_id == producer_id
            ]

    def add(self, order: Order) -> None:
        with self._lock:
            self._store[order.id] = copy.deepcopy(order)

    def save(self, order: Order) -> None:
        with self._lock:
            _check_version(self._store.get(order.id), order, f"Order {order.id}")
            order.version += 1
            self._store[order.id] = copy.deepcopy(order)


class InMemoryShippingRequestRepository(ShippingRequestRepository):

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._store: dict[str, ShippingRequest] = {}

    def get_by_id(self, request_id: str) -> ShippingRequest | None:
        with self._lock:
            return copy.deepcopy(self._store.get(request_id))

    def get_by_producer(self, producer_id: str) -> list[ShippingRequest]:
        with self._lock:
            return [
                copy.deepcopy(r)
                for r in self._store.values()
                if r.producer_id == producer_id
            ]

    def get_pending(self) -> list[ShippingRequest]:
        with self._lock:
            return [
                copy.deepcopy(r)
                for r in self._store.values()
                if r.status == ShippingStatus.PENDING
            ]

    def add(self, request: ShippingRequest) -> None:
        with self._lock:
            self._store[request.id] = copy.deepcopy(request)

    def save(self, request: ShippingRequest) -> None:
        with self._lock:
            _check_version(
                self._store.get(request.id), request, f"Shipping request {request.id}"
            )
            request.version += 1
            self._store[request.id] = copy.deepcopy(request)


def _check_version(stored, incoming, label: str) -> None:
    if stored is not None and stored.version != incoming.version:
        raise ConcurrencyError(f"{label} was modified concurrently, please retry")
