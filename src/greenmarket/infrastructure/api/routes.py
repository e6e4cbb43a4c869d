from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from greenmarket.application.authenticate_user import AuthenticateUserHandler
from greenmarket.application.dto import LocationSpec, OrderItemSpec
from greenmarket.application.list_orders import (
    ListConsumerOrdersHandler,
    ListProducerSalesHandler,
)
from greenmarket.application.place_order import PlaceOrderHandler
from greenmarket.application.producer_profile import (
    GetProducerProfileHandler,
    UpdateProducerProfileHandler,
)
from greenmarket.application.producer_statistics import (
    ProducerDashboardSummaryHandler,
    ProducerStatisticsHandler,
)
from greenmarket.application.products_for_transport import ProductsForTransportHandler
from greenmarket.application.register_product import RegisterProductHandler
from greenmarket.application.register_user import RegisterUserHandler
from greenmarket.application.shipping_history import ShippingHistoryHandler
from greenmarket.application.solicit_transport import SolicitTransportHandler
from greenmarket.application.update_order_status import UpdateOrderStatusHandler
from greenmarket.application.update_product import UpdateProductHandler
from greenmarket.application.update_shipping_status import UpdateShippingStatusHandler
from greenmarket.infrastructure.api.dependencies import (
    Caller,
    get_container,
    require_consumer,
    require_producer,
)
from greenmarket.infrastructure.api.schemas import (
    AuthenticatedUserResponse,
    CreatedResponse,
    DashboardSummaryResponse,
    ErrorResponse,
    LoginRequest,
    OrderResponse,
    PlaceOrderRequest,
    ProducerProfileResponse,
    ProducerStatisticsResponse,
    ProductForTransportResponse,
    ProductRequest,
    RegisterUserRequest,
    ShippingRequestRequest,
    ShippingRequestResponse,
    StatusResponse,
    StatusUpdateRequest,
    UpdateProducerProfileRequest,
)
from greenmarket.infrastructure.bootstrap import Container

router = APIRouter()

_ERRORS = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}


# --- Users and auth ---------------------------------------------------------


@router.post(
    "/users/register",
    response_model=CreatedResponse,
    responses=_ERRORS,
    status_code=status.HTTP_201_CREATED,
)
def register_user(body: RegisterUserRequest, c: Container = Depends(get_container)):
    """Register a consumer or producer"""
    handler = RegisterUserHandler(c.user_repo, c.hasher)
    user_id = handler.handle(body.full_name, body.email, body.password, body.role)
    return CreatedResponse(id=user_id)


@router.post("/auth/login", response_model=AuthenticatedUserResponse, responses=_ERRORS)
def login(body: LoginRequest, c: Container = Depends(get_container)):
    """Verify credentials"""
    dto = AuthenticateUserHandler(c.user_repo, c.hasher).handle(body.email, body.password)
    return AuthenticatedUserResponse(**vars(dto))


@router.get("/producers/profile", response_model=ProducerProfileResponse, responses=_ERRORS)
def get_profile(
    caller: Caller = Depends(require_producer),
    c: Container = Depends(get_container),
):
    dto = GetProducerProfileHandler(c.user_repo).handle(caller.user_id)
    return ProducerProfileResponse(**vars(dto))


@router.put("/producers/profile", status_code=status.HTTP_204_NO_CONTENT, responses=_ERRORS)
def update_profile(
    body: UpdateProducerProfileRequest,
    caller: Caller = Depends(require_producer),
    c: Container = Depends(get_container),
):
    UpdateProducerProfileHandler(c.user_repo, c.hasher).handle(
        caller.user_id,
        body.full_name,
        description=body.description,
        profile_image_url=body.profile_image_url,
        new_password=body.new_password,
    )


# --- Products ---------------------------------------------------------------


@router.post(
    "/products",
    response_model=CreatedResponse,
    responses=_ERRORS,
    status_code=status.HTTP_201_CREATED,
)
def register_product(
    body: ProductRequest,
    caller: Caller = Depends(require_producer),
    c: Container = Depends(get_container),
):
    """Add a product to the caller's catalog"""
    product_id = RegisterProductHandler(c.product_repo, c.user_repo).handle(
        caller.user_id,
        body.name,
        body.description,
        body.quantity_value,
        body.quantity_unit,
        body.price_value,
        body.price_currency,
    )
    return CreatedResponse(id=product_id)


@router.put("/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT, responses=_ERRORS)
def update_product(
    product_id: str,
    body: ProductRequest,
    caller: Caller = Depends(require_producer),
    c: Container = Depends(get_container),
):
    UpdateProductHandler(c.product_repo, c.user_repo, c.locks).handle(
        caller.user_id,
        product_id,
        body.name,
        body.description,
        body.quantity_value,
        body.quantity_unit,
        body.price_value,
        body.price_currency,
    )


@router.get(
    "/products/for-transport",
    response_model=List[ProductForTransportResponse],
    responses=_ERRORS,
)
def products_for_transport(
    caller: Caller = Depends(require_producer),
    c: Container = Depends(get_container),
):
    products = ProductsForTransportHandler(c.product_repo, c.user_repo).handle(caller.user_id)
    return [ProductForTransportResponse(**vars(p)) for p in products]


# --- Orders -----------------------------------------------------------------


@router.post(
    "/orders",
    response_model=CreatedResponse,
    responses=_ERRORS,
    status_code=status.HTTP_201_CREATED,
)
def place_order(
    body: PlaceOrderRequest,
    caller: Caller = Depends(require_consumer),
    c: Container = Depends(get_container),
):
    """Place an order with a single producer"""
    if body.consumer_id != caller.user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Consumers can only place orders for themselves",
        )
    items = [
        OrderItemSpec(
            product_id=i.product_id,
            quantity_value=i.quantity_value,
            quantity_unit=i.quantity_unit,
            unit_price_value=i.unit_price_value,
            unit_price_currency=i.unit_price_currency,
        )
        for i in body.items
    ]
    handler = PlaceOrderHandler(c.order_repo, c.user_repo, c.stock)
    order_id = handler.handle(body.consumer_id, body.producer_id, items)
    return CreatedResponse(id=order_id)


@router.get("/orders/my-orders", response_model=List[OrderResponse], responses=_ERRORS)
def my_orders(
    caller: Caller = Depends(require_consumer),
    c: Container = Depends(get_container),
):
    orders = ListConsumerOrdersHandler(c.order_repo, c.user_repo).handle(caller.user_id)
    return [OrderResponse.from_dto(o) for o in orders]


@router.get("/orders/my-sales", response_model=List[OrderResponse], responses=_ERRORS)
def my_sales(
    caller: Caller = Depends(require_producer),
    c: Container = Depends(get_container),
):
    orders = ListProducerSalesHandler(c.order_repo, c.user_repo).handle(caller.user_id)
    return [OrderResponse.from_dto(o) for o in orders]


@router.patch("/orders/{order_id}/status", response_model=StatusResponse, responses=_ERRORS)
def update_order_status(
    order_id: str,
    body: StatusUpdateRequest,
    caller: Caller = Depends(require_producer),
    c: Container = Depends(get_container),
):
    new_status = UpdateOrderStatusHandler(c.order_repo, c.user_repo).handle(
        caller.user_id, order_id, body.new_status
    )
    return StatusResponse(id=order_id, status=new_status)


# --- Shipping ---------------------------------------------------------------


@router.post(
    "/shipping/request",
    response_model=CreatedResponse,
    responses=_ERRORS,
    status_code=status.HTTP_201_CREATED,
)
def request_transport(
    body: ShippingRequestRequest,
    caller: Caller = Depends(require_producer),
    c: Container = Depends(get_container),
):
    """Request transport for part of a product's stock"""
    handler = SolicitTransportHandler(c.shipping_repo, c.user_repo, c.stock)
    request_id = handler.handle(
        caller.user_id,
        body.product_id,
        body.quantity_value,
        body.quantity_unit,
        LocationSpec(**body.origin.model_dump()),
        LocationSpec(**body.destination.model_dump()),
        body.required_date,
        special_instructions=body.special_instructions,
    )
    return CreatedResponse(id=request_id)


@router.get("/shipping/history", response_model=List[ShippingRequestResponse], responses=_ERRORS)
def shipping_history(
    caller: Caller = Depends(require_producer),
    c: Container = Depends(get_container),
):
    handler = ShippingHistoryHandler(c.shipping_repo, c.product_repo, c.user_repo)
    return [ShippingRequestResponse(**vars(r)) for r in handler.handle(caller.user_id)]


@router.patch("/shipping/{request_id}/status", response_model=StatusResponse, responses=_ERRORS)
def update_shipping_status(
    request_id: str,
    body: StatusUpdateRequest,
    caller: Caller = Depends(require_producer),
    c: Container = Depends(get_container),
):
    new_status = UpdateShippingStatusHandler(c.shipping_repo, c.user_repo).handle(
        caller.user_id, request_id, body.new_status
    )
    return StatusResponse(id=request_id, status=new_status)


# --- Statistics -------------------------------------------------------------


@router.get(
    "/statistics/dashboard-summary",
    response_model=DashboardSummaryResponse,
    responses=_ERRORS,
)
def dashboard_summary(
    caller: Caller = Depends(require_producer),
    c: Container = Depends(get_container),
):
    handler = ProducerDashboardSummaryHandler(
        c.product_repo, c.shipping_repo, c.order_repo, c.user_repo
    )
    return DashboardSummaryResponse(**vars(handler.handle(caller.user_id)))


@router.get("/statistics/producer", response_model=ProducerStatisticsResponse, responses=_ERRORS)
def producer_statistics(
    caller: Caller = Depends(require_producer),
    c: Container = Depends(get_container),
):
    handler = ProducerStatisticsHandler(c.order_repo, c.shipping_repo, c.user_repo)
    return ProducerStatisticsResponse(**vars(handler.handle(caller.user_id)))
