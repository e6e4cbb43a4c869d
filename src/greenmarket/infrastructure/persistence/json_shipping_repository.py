"""JSON-file-backed implementation of ShippingRequestRepository."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

from greenmarket.domain.exceptions import ConcurrencyError
from greenmarket.domain.model.shipping import ShippingRequest, ShippingStatus
from greenmarket.domain.model.value_objects import Location, Quantity
from greenmarket.domain.repository.shipping_repository import (
    ShippingRequestRepository,
)
from greenmarket.infrastructure.persistence.json_store import JsonFile


class JsonShippingRequestRepository(ShippingRequestRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    def get_by_id(self, request_id: str) -> ShippingRequest | None:
        for raw in self._file.load():
            if raw["id"] == request_id:
                return self._to_domain(raw)
        return None

    def get_by_producer(self, producer_id: str) -> list[ShippingRequest]:
        return [
            self._to_domain(raw)
            for raw in self._file.load()
            if raw["producer_id"] == producer_id
        ]

    def get_pending(self) -> list[ShippingRequest]:
        return [
            self._to_domain(raw)
            for raw in self._file.load()
            if raw["status"] == ShippingStatus.PENDING.value
        ]

    def add(self, request: ShippingRequest) -> None:
        self._file.upsert(self._to_raw(request))

    def save(self, request: ShippingRequest) -> None:
        raw = self._to_raw(request)
        raw["version"] = request.version + 1
        if not self._file.swap(raw, request.version):
            raise ConcurrencyError(
                f"Shipping request {request.id} was modified concurrently, please retry"
            )
        request.version += 1

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _location_to_raw(location: Location) -> dict:
        return {
            "address": location.address,
            "city": location.city,
            "country": location.country,
        }

    @staticmethod
    def _to_raw(request: ShippingRequest) -> dict:
        return {
            "id": request.id,
            "producer_id": request.producer_id,
            "product_id": request.product_id,
            "quantity": str(request.quantity.value),
            "unit": request.quantity.unit,
            "origin": JsonShippingRequestRepository._location_to_raw(request.origin),
            "destination": JsonShippingRequestRepository._location_to_raw(
                request.destination
            ),
            "required_date": request.required_date.isoformat(),
            "special_instructions": request.special_instructions,
            "status": request.status.value,
            "created_at": request.created_at.isoformat(),
            "version": request.version,
        }

    @staticmethod
    def _to_domain(raw: dict) -> ShippingRequest:
        return ShippingRequest(
            id=raw["id"],
            producer_id=raw["producer_id"],
            product_id=raw["product_id"],
            quantity=Quantity(Decimal(raw["quantity"]), raw["unit"]),
            origin=Location(**raw["origin"]),
            destination=Location(**raw["destination"]),
            required_date=date.fromisoformat(raw["required_date"]),
            special_instructions=raw.get("special_instructions"),
            status=ShippingStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            version=raw.get("version", 0),
        )
