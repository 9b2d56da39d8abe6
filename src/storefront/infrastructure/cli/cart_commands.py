"""CLI commands for a user's cart."""

from __future__ import annotations

import json

import click

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.clear_cart import ClearCartHandler
from storefront.application.dto import CartDTO
from storefront.application.remove_from_cart import RemoveFromCartHandler
from storefront.application.show_cart import ShowCartHandler
from storefront.application.sync_cart import SyncCartHandler
from storefront.application.update_cart_item import UpdateCartItemHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import cart_repository, product_repository


def _display_cart(dto: CartDTO) -> None:
    if not dto.items:
        click.echo(f"Cart for {dto.user_id} is empty.")
        return

    click.echo(f"Cart for {dto.user_id}")
    click.echo()
    click.echo(f"  {'Item':<34} {'Product':<24} {'Variant':<16} {'Qty':>5}")
    click.echo(f"  {'-'*82}")
    for item in dto.items:
        variant = f"{item.variant['size']}/{item.variant['color']}"
        title = (item.title or item.product_id)[:24]
        click.echo(f"  {item.id:<34} {title:<24} {variant:<16} {item.quantity:>5}")
    click.echo(f"  {'-'*82}")
    click.echo(f"  {'Total':<27} {'$' + dto.total_amount:>57}")


@click.command("show")
@click.option("--user", "user_id", required=True, help="User ID.")
def cart_show(user_id: str) -> None:
    """Show a user's cart."""
    handler = ShowCartHandler(cart_repo=cart_repository(), product_repo=product_repository())
    _display_cart(handler.handle(user_id))


@click.command("add")
@click.option("--user", "user_id", required=True, help="User ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--variant-id", required=True)
@click.option("--size", required=True)
@click.option("--color", required=True)
@click.option("--quantity", default=1, type=int, show_default=True)
def cart_add(
    user_id: str,
    product_id: str,
    variant_id: str,
    size: str,
    color: str,
    quantity: int,
) -> None:
    """Add a product variant to a user's cart."""
    handler = AddToCartHandler(cart_repo=cart_repository(), product_repo=product_repository())

    try:
        dto = handler.handle(
            user_id,
            product_id,
            quantity,
            {"variant_id": variant_id, "size": size, "color": color},
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("sync")
@click.option("--user", "user_id", required=True, help="User ID.")
@click.option("--file", "snapshot", required=True, type=click.File("r"), help="JSON list of cart lines ('-' for stdin).")
def cart_sync(user_id: str, snapshot) -> None:
    """Merge a locally held cart into the user's server cart."""
    try:
        items = json.load(snapshot)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"Cart snapshot is not valid JSON: {exc}")

    handler = SyncCartHandler(cart_repo=cart_repository(), product_repo=product_repository())

    try:
        dto = handler.handle(user_id, items)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("update")
@click.option("--user", "user_id", required=True, help="User ID.")
@click.option("--item", "item_id", required=True, help="Cart item ID.")
@click.option("--quantity", required=True, type=int)
def cart_update(user_id: str, item_id: str, quantity: int) -> None:
    """Set the quantity of a cart line."""
    handler = UpdateCartItemHandler(cart_repo=cart_repository(), product_repo=product_repository())

    try:
        dto = handler.handle(user_id, item_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("remove")
@click.option("--user", "user_id", required=True, help="User ID.")
@click.option("--item", "item_id", required=True, help="Cart item ID.")
def cart_remove(user_id: str, item_id: str) -> None:
    """Remove a line from the cart."""
    handler = RemoveFromCartHandler(cart_repo=cart_repository(), product_repo=product_repository())

    try:
        dto = handler.handle(user_id, item_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("clear")
@click.option("--user", "user_id", required=True, help="User ID.")
def cart_clear(user_id: str) -> None:
    """Delete a user's cart."""
    handler = ClearCartHandler(cart_repo=cart_repository())

    try:
        handler.handle(user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Cart for {user_id} cleared.")
