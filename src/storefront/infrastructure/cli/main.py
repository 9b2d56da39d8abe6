import click
import uvicorn

from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_sync,
    cart_update,
)
from storefront.infrastructure.cli.category_commands import (
    category_add,
    category_delete,
    category_list,
    category_products,
    category_recount,
    category_update,
)
from storefront.infrastructure.cli.order_commands import (
    order_cancel,
    order_create,
    order_list,
    order_show,
    order_status,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_show,
    product_stock,
    product_update,
    product_variant,
)
from storefront.utils.logging import configure_logging


@click.group()
def cli() -> None:
    """Storefront: catalog, cart and order management."""
    configure_logging()


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def category() -> None:
    """Manage categories."""


@cli.group()
def cart() -> None:
    """Manage user carts."""


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.command()
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8000, type=int, show_default=True)
def serve(host: str, port: int) -> None:
    """Run the HTTP API."""
    uvicorn.run("storefront.infrastructure.api.app:app", host=host, port=port)


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_stock)
product.add_command(product_update)
product.add_command(product_variant)
category.add_command(category_add)
category.add_command(category_delete)
category.add_command(category_list)
category.add_command(category_products)
category.add_command(category_recount)
category.add_command(category_update)
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_sync)
cart.add_command(cart_update)
order.add_command(order_cancel)
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
