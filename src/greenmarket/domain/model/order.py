"""Order aggregate, the core of the domain.

The Order is an aggregate root that owns its items.
All business invariants are enforced here.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from greenmarket.domain.exceptions import StateError, ValidationError
from greenmarket.domain.model.lifecycle import ensure_forward
from greenmarket.domain.model.value_objects import Price, Quantity


class OrderStatus(Enum):
    # Declaration order is the progression order.
    PENDING = "Pending"
    PAID = "Paid"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"
    COMPLETED = "Completed"


TERMINAL_ORDER_STATUSES = frozenset(
    {OrderStatus.CANCELLED, OrderStatus.DELIVERED, OrderStatus.COMPLETED}
)


@dataclass(frozen=True)
class OrderItem:
    """Captures the product name and price snapshot at purchase time.

    Immutable: later changes to the Product never leak into the order.
    """

    id: str
    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Price  # locked at purchase time

    def __post_init__(self) -> None:
        if not self.product_id:
            raise ValidationError("Product ID cannot be empty for an order item")
        if not self.product_name or not self.product_name.strip():
            raise ValidationError("Product name cannot be empty for an order item")

    @property
    def line_total(self) -> Decimal:
        return self.quantity.value * self.unit_price.value

    @staticmethod
    def snapshot(
        product_id: str,
        product_name: str,
        quantity: Quantity,
        unit_price: Price,
    ) -> OrderItem:
        return OrderItem(
            id=str(uuid.uuid4()),
            product_id=product_id,
            product_name=product_name,
            quantity=quantity,
            unit_price=unit_price,
        )


@dataclass(eq=False)
class Order:
    """Aggregate root for consumer orders.

    Use the ``Order.place()`` factory for new orders; it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    ``version`` is owned by the repository, as on ``Product``.
    """

    id: str
    consumer_id: str
    producer_id: str
    items: tuple[OrderItem, ...]
    status: OrderStatus = OrderStatus.PENDING
    order_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 0

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def place(
        consumer_id: str,
        producer_id: str,
        items: list[OrderItem],
    ) -> Order:
        if not consumer_id:
            raise ValidationError("Consumer ID cannot be empty")
        if not producer_id:
            raise ValidationError("Producer ID cannot be empty")
        if not items:
            raise ValidationError("Order must contain at least one item")

        return Order(
            id=str(uuid.uuid4()),
            consumer_id=consumer_id,
            producer_id=producer_id,
            items=tuple(items),
        )

    # --- State transitions ----------------------------------------------------

    def update_status(self, new_status: OrderStatus) -> None:
        """Move the order forward.

        Terminal orders never change. ``Paid`` is only reachable from
        ``Pending``. Any other forward move, skips included, is accepted.
        """
        ensure_forward(self.status, new_status, TERMINAL_ORDER_STATUSES, "order")
        if new_status == OrderStatus.PAID and self.status != OrderStatus.PENDING:
            raise StateError(
                "Order must be in 'Pending' status to be marked as 'Paid'"
            )
        self.status = new_status

    def cancel(self) -> None:
        self.update_status(OrderStatus.CANCELLED)

    # --- Computed properties --------------------------------------------------

    @property
    def total_amount(self) -> Decimal:
        return sum((item.line_total for item in self.items), Decimal("0"))

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_ORDER_STATUSES

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Order) and other.id == self.id

    def __hash__(self) -> int:
        return hash(self.id)
