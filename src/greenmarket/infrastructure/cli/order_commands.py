"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from greenmarket.application.dto import OrderDTO, OrderItemSpec
from greenmarket.application.list_orders import (
    ListConsumerOrdersHandler,
    ListProducerSalesHandler,
)
from greenmarket.application.place_order import PlaceOrderHandler
from greenmarket.application.update_order_status import UpdateOrderStatusHandler
from greenmarket.domain.exceptions import DomainException
from greenmarket.infrastructure.bootstrap import container


def _parse_item(raw: str) -> OrderItemSpec:
    """Parse 'PRODUCT_ID:QTY:UNIT:PRICE:CURRENCY' into an OrderItemSpec."""
    parts = [p.strip() for p in raw.split(":")]
    if len(parts) != 5 or not all(parts):
        raise click.BadParameter(
            f"Invalid item format '{raw}'. "
            f"Expected 'ProductId:Quantity:Unit:UnitPrice:Currency'."
        )
    product_id, quantity, unit, price, currency = parts
    return OrderItemSpec(
        product_id=product_id,
        quantity_value=quantity,
        quantity_unit=unit,
        unit_price_value=price,
        unit_price_currency=currency,
    )


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  (status={dto.status})")
    click.echo(f"Placed:   {dto.order_date:%Y-%m-%d %H:%M} UTC")
    click.echo(f"Consumer: {dto.consumer_id}")
    click.echo(f"  {'Product':<20} {'Qty':>12} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*55}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {f'{item.quantity} {item.unit}':>12} "
            f"{item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*55}")
    click.echo(f"  {'Order Total':<20} {dto.total_amount:>34}")


@click.command("place")
@click.option("--consumer", "consumer_id", required=True, help="Consumer ID.")
@click.option("--producer", "producer_id", required=True, help="Producer ID.")
@click.option(
    "--item",
    "items",
    required=True,
    multiple=True,
    help="Item as 'ProductId:Quantity:Unit:UnitPrice:Currency'. Repeatable.",
)
def order_place(consumer_id: str, producer_id: str, items: tuple[str, ...]) -> None:
    """Place an order with a single producer."""
    specs = [_parse_item(raw) for raw in items]

    c = container()
    handler = PlaceOrderHandler(
        order_repo=c.order_repo, user_repo=c.user_repo, stock=c.stock
    )

    try:
        order_id = handler.handle(consumer_id, producer_id, specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} placed.")


@click.command("list")
@click.option("--consumer", "consumer_id", required=True, help="Consumer ID.")
def order_list(consumer_id: str) -> None:
    """Show a consumer's orders, newest first."""
    c = container()
    handler = ListConsumerOrdersHandler(order_repo=c.order_repo, user_repo=c.user_repo)

    try:
        orders = handler.handle(consumer_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders yet.")
    for dto in orders:
        _display_order(dto)
        click.echo()


@click.command("sales")
@click.option("--producer", "producer_id", required=True, help="Producer ID.")
def order_sales(producer_id: str) -> None:
    """Show the orders a producer received, newest first."""
    c = container()
    handler = ListProducerSalesHandler(order_repo=c.order_repo, user_repo=c.user_repo)

    try:
        orders = handler.handle(producer_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No sales yet.")
    for dto in orders:
        _display_order(dto)
        click.echo()


@click.command("status")
@click.option("--producer", "producer_id", required=True, help="Producer ID.")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--status", "new_status", required=True, help="Target status, e.g. Shipped.")
def order_status(producer_id: str, order_id: str, new_status: str) -> None:
    """Move an order forward."""
    c = container()
    handler = UpdateOrderStatusHandler(order_repo=c.order_repo, user_repo=c.user_repo)

    try:
        status = handler.handle(producer_id, order_id, new_status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} is now {status}.")
