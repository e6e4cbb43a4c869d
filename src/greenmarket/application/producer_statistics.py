"""Application services: producer dashboard and statistics (queries).

Pure aggregation over the producer's orders, shipping requests and
products.  Quantities are only summed for items sold in kilograms.
"""

from __future__ import annotations

from decimal import Decimal

from greenmarket.application.actors import ActorDirectory
from greenmarket.application.dto import DashboardSummaryDTO, ProducerStatisticsDTO
from greenmarket.domain.model.order import Order, OrderStatus
from greenmarket.domain.model.shipping import ShippingStatus
from greenmarket.domain.repository.order_repository import OrderRepository
from greenmarket.domain.repository.product_repository import ProductRepository
from greenmarket.domain.repository.shipping_repository import (
    ShippingRequestRepository,
)
from greenmarket.domain.repository.user_repository import UserRepository

KILOGRAM = "kg"


def total_sales_amount(orders: list[Order]) -> Decimal:
    return sum((o.total_amount for o in orders), Decimal("0"))


def total_kg_sold(orders: list[Order]) -> Decimal:
    return sum(
        (
            item.quantity.value
            for order in orders
            for item in order.items
            if item.quantity.unit.lower() == KILOGRAM
        ),
        Decimal("0"),
    )


class ProducerDashboardSummaryHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        shipping_repo: ShippingRequestRepository,
        order_repo: OrderRepository,
        user_repo: UserRepository,
    ) -> None:
        self._product_repo = product_repo
        self._shipping_repo = shipping_repo
        self._order_repo = order_repo
        self._actors = ActorDirectory(user_repo)

    def handle(self, producer_id: str) -> DashboardSummaryDTO:
        self._actors.require_producer(producer_id)

        products = self._product_repo.get_by_producer(producer_id)
        requests = self._shipping_repo.get_by_producer(producer_id)
        sales = self._order_repo.get_by_producer(producer_id)

        return DashboardSummaryDTO(
            registered_products_count=len(products),
            requested_transports_count=len(requests),
            completed_orders_count=sum(
                1 for o in sales if o.status == OrderStatus.COMPLETED
            ),
            total_sales_amount=total_sales_amount(sales),
            total_products_sold_kg=total_kg_sold(sales),
        )


class ProducerStatisticsHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        shipping_repo: ShippingRequestRepository,
        user_repo: UserRepository,
    ) -> None:
        self._order_repo = order_repo
        self._shipping_repo = shipping_repo
        self._actors = ActorDirectory(user_repo)

    def handle(self, producer_id: str) -> ProducerStatisticsDTO:
        self._actors.require_producer(producer_id)

        sales = self._order_repo.get_by_producer(producer_id)
        requests = self._shipping_repo.get_by_producer(producer_id)

        return ProducerStatisticsDTO(
            total_sales_count=len(sales),
            total_sales_amount=total_sales_amount(sales),
            total_products_sold_kg=total_kg_sold(sales),
            total_transport_requests=len(requests),
            completed_transport_requests=sum(
                1 for r in requests if r.status == ShippingStatus.COMPLETED
            ),
        )
