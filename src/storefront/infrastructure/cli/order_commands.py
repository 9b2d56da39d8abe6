"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.create_order import CreateOrderHandler
from storefront.application.dto import GuestLineSpec, OrderDTO
from storefront.application.show_order import (
    ListAllOrdersHandler,
    ListUserOrdersHandler,
    ShowOrderHandler,
)
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    cart_repository,
    order_repository,
    product_repository,
)

_STATUSES = click.Choice(["pending", "processing", "shipped", "delivered", "cancelled"])


def _parse_guest_items(raw: str) -> list[GuestLineSpec]:
    """Parse 'pid:vid:2,pid:vid:1' into GuestLineSpec list."""
    specs: list[GuestLineSpec] = []
    for entry in raw.split(","):
        entry = entry.strip()
        parts = entry.split(":")
        if len(parts) != 3:
            raise click.BadParameter(
                f"Invalid item format '{entry}'. Expected 'ProductId:VariantId:Quantity'."
            )
        product_id, variant_id, qty_str = (p.strip() for p in parts)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(GuestLineSpec(product_id=product_id, variant_id=variant_id, quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.user_id or 'guest'}")
    click.echo(f"Payment:  {dto.payment_method}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<24} {'Variant':<12} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*65}")
    for line in dto.lines:
        variant = f"{line.size}/{line.color}"
        click.echo(
            f"  {line.title[:24]:<24} {variant[:12]:<12} {line.quantity:>5} "
            f"{'$' + line.price:>10} {'$' + line.line_total:>10}"
        )
    click.echo(f"  {'-'*65}")
    click.echo(f"  {'Order Total':<27} {'$' + dto.total_amount:>38}")


@click.command("create")
@click.option("--user", "user_id", default=None, help="User ID (omit for guest checkout).")
@click.option("--payment", "payment_method", required=True, type=click.Choice(["cash", "card"]))
@click.option("--street", required=True)
@click.option("--city", required=True)
@click.option("--state", default=None)
@click.option("--postal-code", required=True)
@click.option("--items", "items_str", default=None, help="Guest items as 'ProductId:VariantId:Qty,...'.")
def order_create(
    user_id: str | None,
    payment_method: str,
    street: str,
    city: str,
    state: str | None,
    postal_code: str,
    items_str: str | None,
) -> None:
    """Place an order from a user's cart, or as a guest with --items."""
    guest_cart = _parse_guest_items(items_str) if items_str else None

    handler = CreateOrderHandler(
        order_repo=order_repository(),
        cart_repo=cart_repository(),
        product_repo=product_repository(),
    )

    try:
        dto = handler.handle(
            user_id=user_id,
            payment_method=payment_method,
            shipping_address={
                "street": street,
                "city": city,
                "state": state,
                "postal_code": postal_code,
            },
            guest_cart=guest_cart,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@click.option("--user", "user_id", required=True, help="Owning user ID.")
def order_show(order_id: str, user_id: str) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id, user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--user", "user_id", default=None, help="List this user's orders.")
@click.option("--role", default=None, help="Caller role; 'admin' lists every order.")
def order_list(user_id: str | None, role: str | None) -> None:
    """List a user's orders, or every order for an admin."""
    try:
        if user_id is not None:
            orders = ListUserOrdersHandler(order_repo=order_repository()).handle(user_id)
        else:
            orders = ListAllOrdersHandler(order_repo=order_repository()).handle(role)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<34} {'Status':<12} {'Total':>10}")
    click.echo("-" * 58)
    for o in orders:
        click.echo(f"{o.id:<34} {o.status:<12} {'$' + o.total_amount:>10}")


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--user", "user_id", required=True, help="Owning user ID.")
@click.option("--status", required=True, type=_STATUSES)
def order_status(order_id: str, user_id: str, status: str) -> None:
    """Move an order to a new status."""
    handler = UpdateOrderStatusHandler(order_repo=order_repository())

    try:
        handler.handle(order_id, user_id, status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} is now {status}.")


@click.command("cancel")
@click.option("--id", "order_id", required=True, help="Order ID to cancel.")
@click.option("--user", "user_id", required=True, help="Owning user ID.")
def order_cancel(order_id: str, user_id: str) -> None:
    """Cancel an order that has not shipped yet."""
    handler = CancelOrderHandler(order_repo=order_repository())

    try:
        handler.handle(order_id, user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} cancelled.")
