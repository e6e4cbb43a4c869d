from pydantic import BaseModel
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional


class RegisterUserRequest(BaseModel):
    full_name: str
    email: str
    password: str
    role: str


class LoginRequest(BaseModel):
    email: str
    password: str


class AuthenticatedUserResponse(BaseModel):
    user_id: str
    full_name: str
    role: str


class ProducerProfileResponse(BaseModel):
    id: str
    full_name: str
    email: str
    description: Optional[str] = None
    profile_image_url: Optional[str] = None


class UpdateProducerProfileRequest(BaseModel):
    full_name: str
    description: Optional[str] = None
    profile_image_url: Optional[str] = None
    new_password: Optional[str] = None


class ProductRequest(BaseModel):
    name: str
    description: str
    quantity_value: Decimal
    quantity_unit: str
    price_value: Decimal
    price_currency: str = "USD"


class ProductForTransportResponse(BaseModel):
    id: str
    name: str
    quantity: Decimal
    unit: str


class OrderItemRequest(BaseModel):
    product_id: str
    quantity_value: Decimal
    quantity_unit: str
    unit_price_value: Decimal
    unit_price_currency: str


class PlaceOrderRequest(BaseModel):
    consumer_id: str
    producer_id: str
    items: List[OrderItemRequest]


class OrderItemResponse(BaseModel):
    product_id: str
    product_name: str
    quantity: Decimal
    unit: str
    unit_price: Decimal
    currency: str
    line_total: Decimal


class OrderResponse(BaseModel):
    id: str
    consumer_id: str
    producer_id: str
    order_date: datetime
    status: str
    total_amount: Decimal
    items: List[OrderItemResponse]

    @classmethod
    def from_dto(cls, dto):
        return cls(
            id=dto.id,
            consumer_id=dto.consumer_id,
            producer_id=dto.producer_id,
            order_date=dto.order_date,
            status=dto.status,
            total_amount=dto.total_amount,
            items=[OrderItemResponse(**vars(item)) for item in dto.items],
        )


class StatusUpdateRequest(BaseModel):
    new_status: str


class StatusResponse(BaseModel):
    id: str
    status: str


class LocationRequest(BaseModel):
    address: str
    city: str
    country: str


class ShippingRequestRequest(BaseModel):
    product_id: str
    quantity_value: Decimal
    quantity_unit: str
    origin: LocationRequest
    destination: LocationRequest
    required_date: date
    special_instructions: Optional[str] = None


class ShippingRequestResponse(BaseModel):
    id: str
    product_id: str
    product_name: str
    quantity: Decimal
    unit: str
    origin_address: str
    destination_address: str
    required_date: date
    special_instructions: Optional[str] = None
    status: str
    created_at: datetime


class DashboardSummaryResponse(BaseModel):
    registered_products_count: int
    requested_transports_count: int
    completed_orders_count: int
    total_sales_amount: Decimal
    total_products_sold_kg: Decimal


class ProducerStatisticsResponse(BaseModel):
    total_sales_count: int
    total_sales_amount: Decimal
    total_products_sold_kg: Decimal
    total_transport_requests: int
    completed_transport_requests: int


class CreatedResponse(BaseModel):
    id: str


class ErrorResponse(BaseModel):
    detail: str
