"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from storefront.application.create_product import CreateProductHandler
from storefront.application.delete_product import DeleteProductHandler
from storefront.application.dto import ProductChanges, ProductDTO, ProductSpec, VariantSpec
from storefront.application.list_products import ListProductsHandler
from storefront.application.show_product import ShowProductHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.application.update_variant import (
    AdjustVariantStockHandler,
    UpdateVariantHandler,
)
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import category_repository, product_repository


def _parse_variant(raw: str) -> VariantSpec:
    """Parse 'V1:red:M:10' (id:color:size:stock) into a VariantSpec."""
    parts = raw.split(":")
    if len(parts) != 4:
        raise click.BadParameter(
            f"Invalid variant format '{raw}'. Expected 'VariantId:Color:Size:Stock'."
        )
    variant_id, color, size, stock_str = (p.strip() for p in parts)
    try:
        stock = int(stock_str)
    except ValueError:
        raise click.BadParameter(f"Invalid stock '{stock_str}' for variant '{variant_id}'.")
    return VariantSpec(variant_id=variant_id, color=color, size=size, stock=stock)


def _display_product(dto: ProductDTO) -> None:
    price = f"${dto.price}"
    if dto.discount_price is not None:
        price = f"${dto.discount_price} (was ${dto.price})"
    click.echo(f"Product {dto.id}  [{dto.sku}]")
    click.echo(f"Title:      {dto.title}")
    click.echo(f"Price:      {price}")
    click.echo(f"Categories: {', '.join(dto.categories)}")
    click.echo()
    click.echo(f"  {'Variant':<12} {'Color':<10} {'Size':<6} {'Stock':>6}")
    click.echo(f"  {'-'*37}")
    for v in dto.variants:
        click.echo(f"  {v.variant_id:<12} {v.color:<10} {v.size:<6} {v.stock:>6}")


@click.command("add")
@click.option("--title", required=True, help="Product title.")
@click.option("--description", required=True, help="Product description.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--discount-price", default=None, help="Discounted price, below --price.")
@click.option("--sku", required=True, help="Unique stock-keeping unit.")
@click.option("--category", "categories", multiple=True, required=True, help="Category ID (repeatable).")
@click.option("--variant", "variants", multiple=True, required=True, help="Variant as 'Id:Color:Size:Stock' (repeatable).")
@click.option("--image", "images", multiple=True, required=True, help="Image reference (repeatable).")
@click.option("--material", default=None, help="Material description.")
def product_add(
    title: str,
    description: str,
    price: str,
    discount_price: str | None,
    sku: str,
    categories: tuple[str, ...],
    variants: tuple[str, ...],
    images: tuple[str, ...],
    material: str | None,
) -> None:
    """Add a new product to the catalog."""
    spec = ProductSpec(
        title=title,
        description=description,
        price=price,
        discount_price=discount_price,
        categories=list(categories),
        sku=sku,
        variants=[_parse_variant(v) for v in variants],
        images=list(images),
        material=material,
    )
    handler = CreateProductHandler(
        product_repo=product_repository(),
        category_repo=category_repository(),
    )

    try:
        dto = handler.handle(spec)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {dto.id} '{dto.title}' added at ${dto.price}")


@click.command("list")
@click.option("--page", default=1, type=int, show_default=True)
@click.option("--limit", default=10, type=int, show_default=True)
@click.option("--category", "categories", multiple=True, help="Category ID or slug (repeatable, all must match).")
@click.option("--search", default=None, help="Match title or category name.")
def product_list(page: int, limit: int, categories: tuple[str, ...], search: str | None) -> None:
    """List products in the catalog."""
    handler = ListProductsHandler(
        product_repo=product_repository(),
        category_repo=category_repository(),
    )

    try:
        result = handler.handle(
            page=page, limit=limit, categories=list(categories), search=search
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<34} {'Title':<30} {'Price':>10}")
    click.echo("-" * 76)
    for p in result.products:
        price = p.discount_price or p.price
        click.echo(f"{p.id:<34} {p.title[:30]:<30} {'$' + price:>10}")
    click.echo(f"Page {page} of {result.total_pages} ({result.total_products} products)")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_show(product_id: str) -> None:
    """Show a single product with its variants."""
    handler = ShowProductHandler(product_repo=product_repository())

    try:
        dto = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_product(dto)


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--title", default=None)
@click.option("--description", default=None)
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--discount-price", default=None)
@click.option("--clear-discount", is_flag=True, help="Remove the discount price.")
@click.option("--sku", default=None)
@click.option("--category", "categories", multiple=True, help="Replace categories (repeatable).")
def product_update(
    product_id: str,
    title: str | None,
    description: str | None,
    price: str | None,
    discount_price: str | None,
    clear_discount: bool,
    sku: str | None,
    categories: tuple[str, ...],
) -> None:
    """Update product details."""
    changes = ProductChanges(
        title=title,
        description=description,
        price=price,
        discount_price=discount_price,
        sku=sku,
        categories=list(categories) if categories else None,
        clear_discount_price=clear_discount,
    )
    handler = UpdateProductHandler(
        product_repo=product_repository(),
        category_repo=category_repository(),
    )

    try:
        handler.handle(product_id, changes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} updated.")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_delete(product_id: str) -> None:
    """Soft-delete a product."""
    handler = DeleteProductHandler(
        product_repo=product_repository(),
        category_repo=category_repository(),
    )

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} deleted.")


@click.command("variant")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--variant-id", required=True, help="Variant ID to add or update.")
@click.option("--color", default=None)
@click.option("--size", default=None)
@click.option("--stock", default=None, type=int)
def product_variant(
    product_id: str,
    variant_id: str,
    color: str | None,
    size: str | None,
    stock: int | None,
) -> None:
    """Add a variant, or update an existing one."""
    handler = UpdateVariantHandler(product_repo=product_repository())

    try:
        dto = handler.handle(product_id, variant_id, color=color, size=size, stock=stock)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_product(dto)


@click.command("stock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--variant-id", required=True, help="Variant ID.")
@click.option("--change", "quantity_change", required=True, type=int, help="Units to add (negative to remove).")
def product_stock(product_id: str, variant_id: str, quantity_change: int) -> None:
    """Adjust a variant's stock level."""
    handler = AdjustVariantStockHandler(product_repo=product_repository())

    try:
        dto = handler.handle(product_id, variant_id, quantity_change)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    stock = next(v.stock for v in dto.variants if v.variant_id == variant_id)
    click.echo(f"Variant {variant_id} stock is now {stock}")
