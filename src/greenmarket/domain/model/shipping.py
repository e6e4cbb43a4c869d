"""ShippingRequest aggregate.

A producer reserves stock for transport instead of sale. The request
moves forward through its statuses and freezes once Completed or
Cancelled.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum

from greenmarket.domain.exceptions import PastRequiredDateError, ValidationError
from greenmarket.domain.model.lifecycle import ensure_forward
from greenmarket.domain.model.value_objects import Location, Quantity


class ShippingStatus(Enum):
    PENDING = "Pending"
    SCHEDULED = "Scheduled"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


TERMINAL_SHIPPING_STATUSES = frozenset(
    {ShippingStatus.COMPLETED, ShippingStatus.CANCELLED}
)


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


@dataclass(eq=False)
class ShippingRequest:
    id: str
    producer_id: str
    product_id: str
    quantity: Quantity
    origin: Location
    destination: Location
    required_date: date
    special_instructions: str | None = None
    status: ShippingStatus = ShippingStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 0

    @staticmethod
    def request(
        producer_id: str,
        product_id: str,
        quantity: Quantity,
        origin: Location,
        destination: Location,
        required_date: date,
        special_instructions: str | None = None,
        today: date | None = None,
    ) -> ShippingRequest:
        """Create a new Pending request.

        ``required_date`` is compared date-only against today's UTC date;
        ``today`` may be injected for deterministic callers.
        """
        if not producer_id:
            raise ValidationError("Producer ID cannot be empty")
        if not product_id:
            raise ValidationError("Product ID cannot be empty")
        if quantity.value <= 0:
            raise ValidationError("Quantity must be greater than 0")
        if isinstance(required_date, datetime):
            required_date = required_date.date()
        if required_date < (today or utc_today()):
            raise PastRequiredDateError("Required date must not be in the past")

        instructions = (special_instructions or "").strip() or None
        return ShippingRequest(
            id=str(uuid.uuid4()),
            producer_id=producer_id,
            product_id=product_id,
            quantity=quantity,
            origin=origin,
            destination=destination,
            required_date=required_date,
            special_instructions=instructions,
        )

    def update_status(self, new_status: ShippingStatus) -> None:
        ensure_forward(
            self.status, new_status, TERMINAL_SHIPPING_STATUSES, "shipping request"
        )
        self.status = new_status

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_SHIPPING_STATUSES

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ShippingRequest) and other.id == self.id

    def __hash__(self) -> int:
        return hash(self.id)
