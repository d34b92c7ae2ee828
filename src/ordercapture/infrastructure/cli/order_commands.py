"""CLI commands for the cart and sale aggregates.

Both kinds share one command set; ``order_group(kind)`` builds a click
group bound to the right repository.
"""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

import click

from ordercapture.application.add_item import AddItemHandler
from ordercapture.application.calculate_discount import CalculateDiscountHandler
from ordercapture.application.cancel_order import CancelOrderHandler
from ordercapture.application.create_order import CreateOrderHandler
from ordercapture.application.dto import LineItemSpec, OrderDTO
from ordercapture.application.list_orders import DEFAULT_PAGE_SIZE, ListOrdersHandler
from ordercapture.application.remove_item import RemoveItemHandler
from ordercapture.application.show_order import ShowOrderHandler
from ordercapture.application.show_sale_by_number import ShowSaleByNumberHandler
from ordercapture.domain.exceptions import DomainException, ValidationError
from ordercapture.domain.model.order import OrderKind
from ordercapture.infrastructure.bootstrap import event_publisher, order_repository

ITEM_FORMAT = "ProductId:ProductName:Qty:Price"


def _parse_item(raw: str) -> LineItemSpec:
    """Parse 'P1:Pale Ale:3:4.50' into a LineItemSpec."""
    product_id, sep, rest = raw.strip().partition(":")
    parts = rest.rsplit(":", 2) if sep else []
    if len(parts) != 3:
        raise click.BadParameter(
            f"Invalid item format '{raw}'. Expected '{ITEM_FORMAT}'."
        )
    name, qty_str, price = parts
    try:
        qty = int(qty_str)
    except ValueError:
        raise click.BadParameter(
            f"Invalid quantity '{qty_str}' for product '{name}'."
        )
    return LineItemSpec(
        product_id=product_id.strip(),
        product_name=name.strip(),
        quantity=qty,
        unit_price=price.strip(),
    )


def _error(exc: DomainException) -> click.ClickException:
    if isinstance(exc, ValidationError) and exc.errors:
        lines = [str(exc).split(":", 1)[0]] + [f"  - {e}" for e in exc.errors]
        return click.ClickException("\n".join(lines))
    return click.ClickException(str(exc))


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying a cart or sale."""
    title = f"{dto.kind.capitalize()} {dto.id}"
    if dto.sale_number:
        title += f"  #{dto.sale_number}"
    click.echo(f"{title}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_name} [{dto.customer_id}]")
    click.echo(f"Branch:   {dto.branch_name} [{dto.branch_id}]")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()

    click.echo(
        f"  {'Item':<36} {'Product':<20} {'Qty':>4} {'Price':>10} {'Disc':>5} {'Total':>10}"
    )
    click.echo(f"  {'-'*90}")
    for item in dto.items:
        click.echo(
            f"  {item.id:<36} {item.product_name:<20} {item.quantity:>4} "
            f"{item.unit_price:>10} {item.discount:>5} {item.total:>10}"
        )
    click.echo(f"  {'-'*90}")
    click.echo(f"  {'Subtotal':<30} {dto.gross_total:>60}")
    click.echo(f"  {'Discount':<30} {dto.total_discount:>60}")
    click.echo(f"  {'Total':<30} {dto.total:>60}")


def order_group(kind: OrderKind) -> click.Group:
    label = kind.value

    @click.group(name=label, help=f"Manage {label}s.")
    def group() -> None:
        pass

    @group.command("create", help=f"Create a new {label}.")
    @click.option("--customer-id", required=True, help="External customer ID.")
    @click.option("--customer-name", required=True, help="Customer name.")
    @click.option("--branch-id", required=True, help="External branch ID.")
    @click.option("--branch-name", required=True, help="Branch name.")
    @click.option("--sale-number", default=None, help="Sale number (sales only).")
    @click.option(
        "--date", "created_at", default=None,
        type=click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S"]),
        help="Creation date in UTC (defaults to now).",
    )
    @click.option("--item", "items", multiple=True, help=f"Item as '{ITEM_FORMAT}'. Repeatable.")
    def create(
        customer_id: str,
        customer_name: str,
        branch_id: str,
        branch_name: str,
        sale_number: str | None,
        created_at: datetime | None,
        items: tuple[str, ...],
    ) -> None:
        specs = [_parse_item(raw) for raw in items]
        handler = CreateOrderHandler(
            order_repo=order_repository(kind),
            publisher=event_publisher(),
        )
        try:
            dto = handler.handle(
                kind=kind,
                customer_id=customer_id,
                customer_name=customer_name,
                branch_id=branch_id,
                branch_name=branch_name,
                items=specs,
                created_at=created_at.replace(tzinfo=timezone.utc) if created_at else None,
                sale_number=sale_number,
            )
        except DomainException as exc:
            raise _error(exc)

        click.echo(f"{label.capitalize()} {dto.id} created  (status={dto.status})")
        click.echo()
        _display_order(dto)

    @group.command("add-item")
    @click.option("--id", "order_id", required=True, type=click.UUID, help=f"{label.capitalize()} ID.")
    @click.option("--item", "raw_item", required=True, help=f"Item as '{ITEM_FORMAT}'.")
    def add_item(order_id: UUID, raw_item: str) -> None:
        """Add a line item."""
        spec = _parse_item(raw_item)
        handler = AddItemHandler(
            order_repo=order_repository(kind),
            publisher=event_publisher(),
        )
        try:
            item = handler.handle(order_id, spec)
        except DomainException as exc:
            raise _error(exc)

        click.echo(
            f"Added item {item.id}: {item.product_name} x{item.quantity} "
            f"@ {item.unit_price} ({item.discount} off) = {item.total}"
        )

    @group.command("remove-item")
    @click.option("--id", "order_id", required=True, type=click.UUID, help=f"{label.capitalize()} ID.")
    @click.option("--item-id", required=True, type=click.UUID, help="Line item ID to remove.")
    def remove_item(order_id: UUID, item_id: UUID) -> None:
        """Remove a line item."""
        handler = RemoveItemHandler(
            order_repo=order_repository(kind),
            publisher=event_publisher(),
        )
        try:
            dto = handler.handle(order_id, item_id)
        except DomainException as exc:
            raise _error(exc)

        click.echo(f"Item {item_id} removed. New total: {dto.total}")

    @group.command("cancel")
    @click.option("--id", "order_id", required=True, type=click.UUID, help=f"{label.capitalize()} ID.")
    def cancel(order_id: UUID) -> None:
        """Cancel (cannot be undone)."""
        handler = CancelOrderHandler(
            order_repo=order_repository(kind),
            publisher=event_publisher(),
        )
        try:
            handler.handle(order_id)
        except DomainException as exc:
            raise _error(exc)

        click.echo(f"{label.capitalize()} {order_id} cancelled.")

    @group.command("show")
    @click.option("--id", "order_id", default=None, type=click.UUID, help=f"{label.capitalize()} ID.")
    @click.option(
        "--number", "sale_number", default=None,
        hidden=kind is not OrderKind.SALE, help="Sale number (sales only).",
    )
    def show(order_id: UUID | None, sale_number: str | None) -> None:
        """Show details, by ID or (for sales) by sale number."""
        if (order_id is None) == (sale_number is None):
            raise click.UsageError("Pass exactly one of --id or --number.")
        if sale_number is not None and kind is not OrderKind.SALE:
            raise click.UsageError("--number only applies to sales.")

        repo = order_repository(kind)
        try:
            if sale_number is not None:
                dto = ShowSaleByNumberHandler(order_repo=repo).handle(sale_number)
            else:
                dto = ShowOrderHandler(order_repo=repo).handle(order_id)
        except DomainException as exc:
            raise _error(exc)

        _display_order(dto)

    @group.command("list")
    @click.option("--page", default=1, show_default=True, type=int, help="Page number, from 1.")
    @click.option("--page-size", default=DEFAULT_PAGE_SIZE, show_default=True, type=int, help="Entries per page.")
    def list_(page: int, page_size: int) -> None:
        """List all, oldest first."""
        result = ListOrdersHandler(order_repo=order_repository(kind)).handle(
            kind, page=page, page_size=page_size
        )
        if not result.total_count:
            click.echo(f"No {label}s found.")
            return
        if not result.items:
            click.echo(
                f"No {label}s on page {result.page} "
                f"({result.total_count} total, {result.total_pages} page(s))."
            )
            return

        click.echo(f"  {'ID':<36} {'Customer':<20} {'Status':<10} {'Items':>5} {'Total':>12}")
        click.echo(f"  {'-'*87}")
        for dto in result.items:
            click.echo(
                f"  {dto.id:<36} {dto.customer_name:<20} {dto.status:<10} "
                f"{len(dto.items):>5} {dto.total:>12}"
            )
        click.echo(
            f"  Page {result.page} of {result.total_pages}, "
            f"{result.total_count} {label}(s) in total"
        )

    return group


@click.command("discount")
@click.option("--item", "items", multiple=True, required=True, help=f"Item as '{ITEM_FORMAT}'. Repeatable.")
def discount_quote(items: tuple[str, ...]) -> None:
    """Preview tiered discounts without saving anything."""
    specs = [_parse_item(raw) for raw in items]
    try:
        quote = CalculateDiscountHandler().handle(specs)
    except DomainException as exc:
        raise _error(exc)

    click.echo(
        f"  {'Product':<20} {'Qty':>4} {'Price':>10} {'Subtotal':>10} {'Disc':>5} {'Final':>10}"
    )
    click.echo(f"  {'-'*64}")
    for line in quote.lines:
        click.echo(
            f"  {line.product_name:<20} {line.quantity:>4} {line.unit_price:>10} "
            f"{line.subtotal:>10} {line.discount:>5} {line.final_amount:>10}"
        )
    click.echo(f"  {'-'*64}")
    click.echo(f"  {'Subtotal':<30} {quote.subtotal:>34}")
    click.echo(f"  {'Discount':<30} {quote.total_discount:>34}")
    click.echo(f"  {'Final amount':<30} {quote.final_amount:>34}")
