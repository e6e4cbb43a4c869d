"""Domain -> DTO mapping shared by commands and queries."""

from __future__ import annotations

from greenmarket.application.dto import OrderDTO, OrderItemDTO, ShippingRequestDTO
from greenmarket.domain.model.order import Order
from greenmarket.domain.model.shipping import ShippingRequest


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,
        consumer_id=order.consumer_id,
        producer_id=order.producer_id,
        order_date=order.order_date,
        status=order.status.value,
        total_amount=order.total_amount,
        items=[
            OrderItemDTO(
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity.value,
                unit=item.quantity.unit,
                unit_price=item.unit_price.value,
                currency=item.unit_price.currency,
                line_total=item.line_total,
            )
            for item in order.items
        ],
    )


def shipping_request_to_dto(
    request: ShippingRequest, product_name: str
) -> ShippingRequestDTO:
    return ShippingRequestDTO(
        id=request.id,
        product_id=request.product_id,
        product_name=product_name,
        quantity=request.quantity.value,
        unit=request.quantity.unit,
        origin_address=request.origin.address,
        destination_address=request.destination.address,
        required_date=request.required_date,
        special_instructions=request.special_instructions,
        status=request.status.value,
        created_at=request.created_at,
    )
