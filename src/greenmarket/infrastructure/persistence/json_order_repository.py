"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from greenmarket.domain.exceptions import ConcurrencyError
from greenmarket.domain.model.order import Order, OrderItem, OrderStatus
from greenmarket.domain.model.value_objects import Price, Quantity
from greenmarket.domain.repository.order_repository import OrderRepository
from greenmarket.infrastructure.persistence.json_store import JsonFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> Order | None:
        for raw in self._file.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def get_by_consumer(self, consumer_id: str) -> list[Order]:
        return [
            self._to_domain(raw)
            for raw in self._file.load()
            if raw["consumer_id"] == consumer_id
        ]

    def get_by_producer(self, producer_id: str) -> list[Order]:
        return [
            self._to_domain(raw)
            for raw in self._file.load()
            if raw["producer_id"] == producer_id
        ]

    def add(self, order: Order) -> None:
        self._file.upsert(self._to_raw(order))

    def save(self, order: Order) -> None:
        raw = self._to_raw(order)
        raw["version"] = order.version + 1
        if not self._file.swap(raw, order.version):
            raise ConcurrencyError(
                f"Order {order.id} was modified concurrently, please retry"
            )
        order.version += 1

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "consumer_id": order.consumer_id,
            "producer_id": order.producer_id,
            "status": order.status.value,
            "order_date": order.order_date.isoformat(),
            "version": order.version,
            "items": [
                {
                    "id": item.id,
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "quantity": str(item.quantity.value),
                    "unit": item.quantity.unit,
                    "unit_price": str(item.unit_price.value),
                    "currency": item.unit_price.currency,
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = tuple(
            OrderItem(
                id=i["id"],
                product_id=i["product_id"],
                product_name=i["product_name"],
                quantity=Quantity(Decimal(i["quantity"]), i["unit"]),
                unit_price=Price(Decimal(i["unit_price"]), i.get("currency", "USD")),
            )
            for i in raw["items"]
        )
        return Order(
            id=raw["id"],
            consumer_id=raw["consumer_id"],
            producer_id=raw["producer_id"],
            items=items,
            status=OrderStatus(raw["status"]),
            order_date=datetime.fromisoformat(raw["order_date"]),
            version=raw.get("version", 0),
        )
