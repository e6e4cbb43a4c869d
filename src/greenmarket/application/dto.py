"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI/HTTP layers and the application layer
without exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: one line of an order as the consumer's client priced it."""

    product_id: str
    quantity_value: Decimal
    quantity_unit: str
    unit_price_value: Decimal
    unit_price_currency: str


@dataclass(frozen=True)
class LocationSpec:
    address: str
    city: str
    country: str


@dataclass(frozen=True)
class OrderItemDTO:
    product_id: str
    product_name: str
    quantity: Decimal
    unit: str
    unit_price: Decimal
    currency: str
    line_total: Decimal


@dataclass(frozen=True)
class OrderDTO:
    id: str
    consumer_id: str
    producer_id: str
    order_date: datetime
    status: str
    total_amount: Decimal
    items: list[OrderItemDTO]


@dataclass(frozen=True)
class ShippingRequestDTO:
    id: str
    product_id: str
    product_name: str
    quantity: Decimal
    unit: str
    origin_address: str
    destination_address: str
    required_date: date
    special_instructions: str | None
    status: str
    created_at: datetime


@dataclass(frozen=True)
class ProductForTransportDTO:
    id: str
    name: str
    quantity: Decimal
    unit: str


@dataclass(frozen=True)
class ProducerProfileDTO:
    id: str
    full_name: str
    email: str
    description: str | None
    profile_image_url: str | None


@dataclass(frozen=True)
class AuthenticatedUserDTO:
    user_id: str
    full_name: str
    role: str


@dataclass(frozen=True)
class DashboardSummaryDTO:
    registered_products_count: int
    requested_transports_count: int
    completed_orders_count: int
    total_sales_amount: Decimal
    total_products_sold_kg: Decimal


@dataclass(frozen=True)
class ProducerStatisticsDTO:
    total_sales_count: int
    total_sales_amount: Decimal
    total_products_sold_kg: Decimal
    total_transport_requests: int
    completed_transport_requests: int
