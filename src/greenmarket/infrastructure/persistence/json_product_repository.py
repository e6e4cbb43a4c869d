"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from greenmarket.domain.exceptions import ConcurrencyError
from greenmarket.domain.model.product import Product, duplicate_name
from greenmarket.domain.model.value_objects import Price, Quantity
from greenmarket.domain.repository.product_repository import ProductRepository
from greenmarket.infrastructure.persistence.json_store import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._file.load():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def get_by_producer(self, producer_id: str) -> list[Product]:
        return [
            self._to_domain(raw)
            for raw in self._file.load()
            if raw["producer_id"] == producer_id
        ]

    def exists_by_name_for_producer(self, name: str, producer_id: str) -> bool:
        wanted = name.strip().lower()
        return any(
            raw["producer_id"] == producer_id and raw["name"].lower() == wanted
            for raw in self._file.load()
        )

    def add(self, product: Product) -> None:
        with self._file.lock:
            self._ensure_unique_name(product)
            self._file.upsert(self._to_raw(product))

    def save(self, product: Product) -> None:
        with self._file.lock:
            self._ensure_unique_name(product)
            raw = self._to_raw(product)
            raw["version"] = product.version + 1
            if not self._file.swap(raw, product.version):
                raise ConcurrencyError(
                    f"Product '{product.name}' was modified concurrently, please retry"
                )
            product.version += 1

    def delete(self, product: Product) -> None:
        with self._file.lock:
            products = [raw for raw in self._file.load() if raw["id"] != product.id]
            self._file.persist(products)

    def _ensure_unique_name(self, product: Product) -> None:
        wanted = product.name.lower()
        for raw in self._file.load():
            if (
                raw["id"] != product.id
                and raw["producer_id"] == product.producer_id
                and raw["name"].lower() == wanted
            ):
                raise duplicate_name(product.name)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "producer_id": product.producer_id,
            "name": product.name,
            "description": product.description,
            "quantity": str(product.quantity.value),
            "unit": product.quantity.unit,
            "price": str(product.price.value),
            "currency": product.price.currency,
            "version": product.version,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            producer_id=raw["producer_id"],
            name=raw["name"],
            description=raw.get("description", ""),
            quantity=Quantity(Decimal(raw["quantity"]), raw["unit"]),
            price=Price(Decimal(raw["price"]), raw.get("currency", "USD")),
            version=raw.get("version", 0),
        )
