"""CLI commands for the Category aggregate."""

from __future__ import annotations

import click

from storefront.application.manage_category import (
    CreateCategoryHandler,
    DeleteCategoryHandler,
    UpdateCategoryHandler,
)
from storefront.application.recount_categories import RecountCategoriesHandler
from storefront.application.show_category import (
    CategoryProductsHandler,
    ListCategoriesHandler,
)
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import category_repository, product_repository

_TYPES = click.Choice(["product", "demographic", "collection"])


@click.command("add")
@click.option("--name", required=True, help="Category name (the slug is derived from it).")
@click.option("--type", "type_", required=True, type=_TYPES)
@click.option("--description", default=None)
@click.option("--parent", default=None, help="Parent category ID.")
@click.option("--featured", is_flag=True, default=False)
def category_add(
    name: str,
    type_: str,
    description: str | None,
    parent: str | None,
    featured: bool,
) -> None:
    """Create a category."""
    handler = CreateCategoryHandler(category_repo=category_repository())

    try:
        dto = handler.handle(
            name=name,
            type=type_,
            description=description,
            parent=parent,
            is_featured=featured,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Category {dto.id} '{dto.name}' created (slug={dto.slug})")


@click.command("list")
@click.option("--type", "type_", default=None, type=_TYPES)
@click.option("--featured", is_flag=True, default=False, help="Only featured categories.")
def category_list(type_: str | None, featured: bool) -> None:
    """List categories."""
    handler = ListCategoriesHandler(category_repo=category_repository())
    categories = handler.handle(type=type_, featured=featured)

    if not categories:
        click.echo("No categories found.")
        return

    click.echo(f"{'Slug':<24} {'Name':<24} {'Type':<12} {'Products':>8}")
    click.echo("-" * 71)
    for c in categories:
        click.echo(f"{c.slug:<24} {c.name:<24} {c.type:<12} {c.product_count:>8}")


@click.command("products")
@click.option("--slug", required=True, help="Category slug.")
@click.option("--page", default=1, type=int, show_default=True)
@click.option("--limit", default=20, type=int, show_default=True)
@click.option("--sort", default="", help="Field to sort by, '-' prefix for descending.")
def category_products(slug: str, page: int, limit: int, sort: str) -> None:
    """List the products in a category."""
    handler = CategoryProductsHandler(
        category_repo=category_repository(),
        product_repo=product_repository(),
    )

    try:
        result = handler.handle(slug, page=page, limit=limit, sort=sort)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    for p in result.products:
        click.echo(f"{p.id:<34} {p.title[:30]:<30} {'$' + p.price:>10}")
    click.echo(f"Page {page} of {result.total_pages} ({result.total_products} products)")


@click.command("update")
@click.option("--id", "category_id", required=True, help="Category ID.")
@click.option("--name", default=None)
@click.option("--type", "type_", default=None, type=_TYPES)
@click.option("--description", default=None)
@click.option("--parent", default=None)
@click.option("--clear-parent", is_flag=True, help="Make this a top-level category.")
@click.option("--featured/--not-featured", default=None)
def category_update(
    category_id: str,
    name: str | None,
    type_: str | None,
    description: str | None,
    parent: str | None,
    clear_parent: bool,
    featured: bool | None,
) -> None:
    """Update a category."""
    handler = UpdateCategoryHandler(category_repo=category_repository())

    try:
        dto = handler.handle(
            category_id,
            name=name,
            type=type_,
            description=description,
            parent=parent,
            is_featured=featured,
            clear_parent=clear_parent,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Category {dto.id} updated (slug={dto.slug})")


@click.command("delete")
@click.option("--id", "category_id", required=True, help="Category ID.")
def category_delete(category_id: str) -> None:
    """Delete a category and detach it from products."""
    handler = DeleteCategoryHandler(
        category_repo=category_repository(),
        product_repo=product_repository(),
    )

    try:
        handler.handle(category_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Category {category_id} deleted.")


@click.command("recount")
def category_recount() -> None:
    """Rebuild every category's product counter."""
    handler = RecountCategoriesHandler(
        category_repo=category_repository(),
        product_repo=product_repository(),
    )
    drifted = handler.handle()

    if not drifted:
        click.echo("All category counters are accurate.")
        return

    for slug, (was, now) in sorted(drifted.items()):
        click.echo(f"{slug}: {was} -> {now}")
