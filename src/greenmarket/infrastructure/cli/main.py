import click

from greenmarket.config import settings
from greenmarket.infrastructure.cli.order_commands import (
    order_list,
    order_place,
    order_sales,
    order_status,
)
from greenmarket.infrastructure.cli.product_commands import (
    product_list,
    product_register,
    product_update,
)
from greenmarket.infrastructure.cli.shipping_commands import (
    shipping_history,
    shipping_pending,
    shipping_request,
    shipping_status,
)
from greenmarket.infrastructure.cli.stats_commands import stats_dashboard, stats_summary
from greenmarket.infrastructure.cli.user_commands import (
    user_login,
    user_profile,
    user_register,
    user_update_profile,
)
from greenmarket.infrastructure.logging_config import configure_logging


@click.group()
def cli() -> None:
    """Greenmarket: farm-to-consumer marketplace"""
    configure_logging(settings.LOG_LEVEL, json=settings.LOG_JSON)


@cli.group()
def user() -> None:
    """Manage accounts and producer profiles."""


@cli.group()
def product() -> None:
    """Manage a producer's catalog."""


@cli.group()
def order() -> None:
    """Place and track orders."""


@cli.group()
def shipping() -> None:
    """Request and track transports."""


@cli.group()
def stats() -> None:
    """Producer statistics."""


@cli.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8000, show_default=True, type=int)
def serve(host: str, port: int) -> None:
    """Run the HTTP API."""
    import uvicorn

    from greenmarket.infrastructure.api.app import create_app

    uvicorn.run(create_app(), host=host, port=port, log_level=settings.LOG_LEVEL.lower())


# Register subcommands
user.add_command(user_register)
user.add_command(user_login)
user.add_command(user_profile)
user.add_command(user_update_profile)
product.add_command(product_register)
product.add_command(product_update)
product.add_command(product_list)
order.add_command(order_place)
order.add_command(order_list)
order.add_command(order_sales)
order.add_command(order_status)
shipping.add_command(shipping_request)
shipping.add_command(shipping_history)
shipping.add_command(shipping_pending)
shipping.add_command(shipping_status)
stats.add_command(stats_dashboard)
stats.add_command(stats_summary)
