"""CLI commands for shipping (transport) requests."""

from __future__ import annotations

from datetime import datetime

import click

from greenmarket.application.dto import LocationSpec, ShippingRequestDTO
from greenmarket.application.shipping_history import (
    PendingShipmentsHandler,
    ShippingHistoryHandler,
)
from greenmarket.application.solicit_transport import SolicitTransportHandler
from greenmarket.application.update_shipping_status import UpdateShippingStatusHandler
from greenmarket.domain.exceptions import DomainException
from greenmarket.infrastructure.bootstrap import container


def _parse_location(raw: str) -> LocationSpec:
    """Parse 'Address;City;Country' into a LocationSpec."""
    parts = [p.strip() for p in raw.split(";")]
    if len(parts) != 3:
        raise click.BadParameter(
            f"Invalid location '{raw}'. Expected 'Address;City;Country'."
        )
    return LocationSpec(*parts)


def _display_requests(requests: list[ShippingRequestDTO]) -> None:
    if not requests:
        click.echo("No shipping requests.")
        return
    click.echo(
        f"  {'ID':<36} {'Product':<20} {'Quantity':>12} {'Required':>10} {'Status':>11}"
    )
    click.echo(f"  {'-'*93}")
    for r in requests:
        click.echo(
            f"  {r.id:<36} {r.product_name:<20} {f'{r.quantity} {r.unit}':>12} "
            f"{r.required_date.isoformat():>10} {r.status:>11}"
        )


@click.command("request")
@click.option("--producer", "producer_id", required=True, help="Producer ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, help="Quantity to ship.")
@click.option("--unit", required=True, help="Unit of measure; must match the product.")
@click.option("--origin", required=True, help="Origin as 'Address;City;Country'.")
@click.option("--destination", required=True, help="Destination as 'Address;City;Country'.")
@click.option(
    "--date",
    "required_date",
    required=True,
    type=click.DateTime(formats=["%Y-%m-%d"]),
    help="Required date (YYYY-MM-DD).",
)
@click.option("--instructions", default=None, help="Special instructions.")
def shipping_request(
    producer_id: str,
    product_id: str,
    quantity: str,
    unit: str,
    origin: str,
    destination: str,
    required_date: datetime,
    instructions: str | None,
) -> None:
    """Request transport for part of a product's stock."""
    origin_spec = _parse_location(origin)
    destination_spec = _parse_location(destination)

    c = container()
    handler = SolicitTransportHandler(
        shipping_repo=c.shipping_repo, user_repo=c.user_repo, stock=c.stock
    )

    try:
        request_id = handler.handle(
            producer_id,
            product_id,
            quantity,
            unit,
            origin_spec,
            destination_spec,
            required_date.date(),
            special_instructions=instructions,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Shipping request {request_id} created (status=Pending).")


@click.command("history")
@click.option("--producer", "producer_id", required=True, help="Producer ID.")
def shipping_history(producer_id: str) -> None:
    """Show a producer's shipping requests, newest first."""
    c = container()
    handler = ShippingHistoryHandler(
        shipping_repo=c.shipping_repo, product_repo=c.product_repo, user_repo=c.user_repo
    )

    try:
        requests = handler.handle(producer_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_requests(requests)


@click.command("pending")
def shipping_pending() -> None:
    """Show every pending shipping request."""
    c = container()
    handler = PendingShipmentsHandler(shipping_repo=c.shipping_repo, product_repo=c.product_repo)
    _display_requests(handler.handle())


@click.command("status")
@click.option("--producer", "producer_id", required=True, help="Producer ID.")
@click.option("--id", "request_id", required=True, help="Shipping request ID.")
@click.option("--status", "new_status", required=True, help="Target status, e.g. Scheduled.")
def shipping_status(producer_id: str, request_id: str, new_status: str) -> None:
    """Move a shipping request forward."""
    c = container()
    handler = UpdateShippingStatusHandler(shipping_repo=c.shipping_repo, user_repo=c.user_repo)

    try:
        status = handler.handle(producer_id, request_id, new_status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Shipping request {request_id} is now {status}.")
