"""
Release Commands.

Commands for listing and showing releases of a product.
"""

import typer

from pivnet.cli.errors import run_command
from pivnet.cli.printer import Printer
from pivnet.cli.state import CLIState


def list_releases(
    ctx: typer.Context,
    product_slug: str = typer.Option(..., "--product-slug", "-p", help="Product slug e.g. p-mysql"),
) -> None:
    """
    List releases of a product.

    Examples:
        pivnet releases --product-slug=p-mysql
    """
    state: CLIState = ctx.obj
    run_command(_list_releases(state, product_slug))


async def _list_releases(state: CLIState, product_slug: str) -> None:
    """Async implementation of releases command."""
    async with state.authenticated_client() as client:
        releases = await client.releases(product_slug)
    Printer(state.output_format).print_releases(releases)


def show_release(
    ctx: typer.Context,
    product_slug: str = typer.Option(..., "--product-slug", "-p", help="Product slug e.g. p-mysql"),
    release_version: str = typer.Option(..., "--release-version", "-r", help="Release version e.g. 0.1.2-rc1"),
) -> None:
    """
    Show a specific release of a product.

    Examples:
        pivnet release --product-slug=p-mysql --release-version=1.7.13
    """
    state: CLIState = ctx.obj
    run_command(_show_release(state, product_slug, release_version))


async def _show_release(state: CLIState, product_slug: str, release_version: str) -> None:
    """Async implementation of release command."""
    async with state.authenticated_client() as client:
        release = await client.release_for_version(product_slug, release_version)
    Printer(state.output_format).print_release(release)
