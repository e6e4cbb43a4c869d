"""CLI commands for producer statistics."""

from __future__ import annotations

import click

from greenmarket.application.producer_statistics import (
    ProducerDashboardSummaryHandler,
    ProducerStatisticsHandler,
)
from greenmarket.domain.exceptions import DomainException
from greenmarket.infrastructure.bootstrap import container


@click.command("dashboard")
@click.option("--producer", "producer_id", required=True, help="Producer ID.")
def stats_dashboard(producer_id: str) -> None:
    """Show the producer's dashboard summary."""
    c = container()
    handler = ProducerDashboardSummaryHandler(
        product_repo=c.product_repo,
        shipping_repo=c.shipping_repo,
        order_repo=c.order_repo,
        user_repo=c.user_repo,
    )

    try:
        dto = handler.handle(producer_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Registered products:  {dto.registered_products_count}")
    click.echo(f"Transport requests:   {dto.requested_transports_count}")
    click.echo(f"Completed orders:     {dto.completed_orders_count}")
    click.echo(f"Total sales amount:   {dto.total_sales_amount}")
    click.echo(f"Products sold (kg):   {dto.total_products_sold_kg}")


@click.command("summary")
@click.option("--producer", "producer_id", required=True, help="Producer ID.")
def stats_summary(producer_id: str) -> None:
    """Show the producer's sales and transport statistics."""
    c = container()
    handler = ProducerStatisticsHandler(
        order_repo=c.order_repo, shipping_repo=c.shipping_repo, user_repo=c.user_repo
    )

    try:
        dto = handler.handle(producer_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Sales:                {dto.total_sales_count}")
    click.echo(f"Total sales amount:   {dto.total_sales_amount}")
    click.echo(f"Products sold (kg):   {dto.total_products_sold_kg}")
    click.echo(f"Transport requests:   {dto.total_transport_requests}")
    click.echo(f"Completed transports: {dto.completed_transport_requests}")
