import click

from ordercapture.domain.model.order import OrderKind
from ordercapture.infrastructure.cli.order_commands import discount_quote, order_group
from ordercapture.infrastructure.config import get_settings
from ordercapture.infrastructure.logging_config import configure_logging


@click.group()
@click.option(
    "--log-level", default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Override ORDERCAPTURE_LOG_LEVEL.",
)
def cli(log_level: str | None) -> None:
    """Order Capture — carts, sales and tiered discounts"""
    configure_logging(log_level or get_settings().LOG_LEVEL)


# Register subcommands
cli.add_command(order_group(OrderKind.CART))
cli.add_command(order_group(OrderKind.SALE))
cli.add_command(discount_quote)
