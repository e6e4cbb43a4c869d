"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from greenmarket.application.products_for_transport import ProductsForTransportHandler
from greenmarket.application.register_product import RegisterProductHandler
from greenmarket.application.update_product import UpdateProductHandler
from greenmarket.domain.exceptions import DomainException
from greenmarket.infrastructure.bootstrap import container


@click.command("register")
@click.option("--producer", "producer_id", required=True, help="Producer ID.")
@click.option("--name", required=True, help="Product name (unique per producer).")
@click.option("--description", required=True, help="Product description.")
@click.option("--quantity", required=True, help="Stock on hand, e.g. 100.")
@click.option("--unit", required=True, help="Unit of measure, e.g. kg.")
@click.option("--price", required=True, help="Price per unit, e.g. 2.50.")
@click.option("--currency", default="USD", show_default=True, help="Currency code.")
def product_register(
    producer_id: str,
    name: str,
    description: str,
    quantity: str,
    unit: str,
    price: str,
    currency: str,
) -> None:
    """Add a product to a producer's catalog."""
    c = container()
    handler = RegisterProductHandler(product_repo=c.product_repo, user_repo=c.user_repo)

    try:
        product_id = handler.handle(
            producer_id, name, description, quantity, unit, price, currency
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} registered: {name} ({quantity} {unit})")


@click.command("update")
@click.option("--producer", "producer_id", required=True, help="Producer ID.")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", required=True, help="Product name.")
@click.option("--description", required=True, help="Product description.")
@click.option("--quantity", required=True, help="Stock on hand.")
@click.option("--unit", required=True, help="Unit of measure.")
@click.option("--price", required=True, help="Price per unit.")
@click.option("--currency", default="USD", show_default=True, help="Currency code.")
def product_update(
    producer_id: str,
    product_id: str,
    name: str,
    description: str,
    quantity: str,
    unit: str,
    price: str,
    currency: str,
) -> None:
    """Replace a product's details.

    Existing orders keep the price they were placed at.
    """
    c = container()
    handler = UpdateProductHandler(
        product_repo=c.product_repo, user_repo=c.user_repo, locks=c.locks
    )

    try:
        handler.handle(
            producer_id, product_id, name, description, quantity, unit, price, currency
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} updated.")


@click.command("list")
@click.option("--producer", "producer_id", required=True, help="Producer ID.")
def product_list(producer_id: str) -> None:
    """List a producer's products with their stock on hand."""
    c = container()
    handler = ProductsForTransportHandler(product_repo=c.product_repo, user_repo=c.user_repo)

    try:
        products = handler.handle(producer_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products registered.")
        return

    click.echo(f"  {'ID':<36} {'Name':<20} {'Quantity':>12}")
    click.echo(f"  {'-'*70}")
    for p in products:
        click.echo(f"  {p.id:<36} {p.name:<20} {f'{p.quantity} {p.unit}':>12}")
