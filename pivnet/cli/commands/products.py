"""
Product Commands.

Commands for listing and showing products.
"""

import typer

from pivnet.cli.errors import run_command
from pivnet.cli.printer import Printer
from pivnet.cli.state import CLIState


def list_products(ctx: typer.Context) -> None:
    """
    List all products.

    Examples:
        pivnet products
        pivnet --format=json products
    """
    state: CLIState = ctx.obj
    run_command(_list_products(state))


async def _list_products(state: CLIState) -> None:
    """Async implementation of products command."""
    async with state.authenticated_client() as client:
        products = await client.products()
    Printer(state.output_format).print_products(products)


def show_product(
    ctx: typer.Context,
    product_slug: str = typer.Option(..., "--product-slug", "-p", help="Product slug e.g. p-mysql"),
) -> None:
    """
    Show a specific product.

    Examples:
        pivnet product --product-slug=p-mysql
        pivnet --format=yaml product -p p-mysql
    """
    state: CLIState = ctx.obj
    run_command(_show_product(state, product_slug))


async def _show_product(state: CLIState, product_slug: str) -> None:
    """Async implementation of product command."""
    async with state.authenticated_client() as client:
        product = await client.product(product_slug)
    Printer(state.output_format).print_product(product)
