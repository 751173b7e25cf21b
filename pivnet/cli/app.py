"""
pivnet CLI.

Command-line client for the Pivotal Network API.
Built with Typer for type-safe commands and Rich for formatted output.

Usage:
    pivnet --help                                      # Show help
    pivnet --version                                   # Show version

    # Authentication
    pivnet login --api-token=<token>                   # Store credentials
    pivnet logout                                      # Remove credentials

    # Products
    pivnet products                                    # List products
    pivnet product --product-slug=p-mysql              # Show a product

    # Releases
    pivnet releases --product-slug=p-mysql             # List releases
    pivnet release -p p-mysql -r 1.7.13                # Show a release

Options:
    --format          Output format: table, json or yaml
    --config          Path to the config file (default ~/.pivnetrc)
    --profile         Profile in the config file (default "default")
    --verbose         Enable debug logging on stderr
    --help, -h        Show help message
    --version, -v     Show version
"""

from pathlib import Path
from typing import Optional

import structlog
import typer

from pivnet.cli.commands import auth, products, releases
from pivnet.cli.errors import EXIT_ERROR, print_error
from pivnet.cli.state import CLIState, OutputFormat
from pivnet.core.config import DEFAULT_PROFILE, get_settings
from pivnet.core.exceptions import ConfigurationError
from pivnet.core.logging import get_logger, setup_logging
from pivnet.version import VERSION

app = typer.Typer(
    name="pivnet",
    help="Pivotal Network CLI - Products, releases and authentication.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
    # Locals would include the API token
    pretty_exceptions_show_locals=False,
)

logger = get_logger(__name__)

# Register commands
app.command("login")(auth.login)
app.command("logout")(auth.logout)
app.command("products")(products.list_products)
app.command("product")(products.show_product)
app.command("releases")(releases.list_releases)
app.command("release")(releases.show_release)


@app.command("help")
def show_help(ctx: typer.Context) -> None:
    """
    Show this help message.
    """
    # Rich help is printed directly and returns an empty string
    help_text = ctx.parent.get_help()
    if help_text:
        typer.echo(help_text)


@app.command("version")
def show_version() -> None:
    """
    Display version information.
    """
    typer.echo(VERSION)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(VERSION)
        raise typer.Exit()


@app.callback()
def callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable verbose output (DEBUG level logging on stderr)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Path to config file (default: ~/.pivnetrc)",
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TABLE,
        "--format",
        case_sensitive=False,
        help="Output format",
    ),
    profile: str = typer.Option(
        DEFAULT_PROFILE,
        "--profile",
        help="Profile to use from the config file",
    ),
) -> None:
    """
    Pivotal Network CLI.

    Log in once with an API token, then list and inspect products and
    releases as a table, JSON or YAML.
    """
    try:
        setup_logging(level="DEBUG" if verbose else None)
    except ConfigurationError as e:
        # Logging is not configured yet
        print_error(e)
        raise typer.Exit(EXIT_ERROR) from e

    structlog.contextvars.bind_contextvars(source="cli")

    ctx.obj = CLIState(
        output_format=output_format,
        config_path=config if config is not None else get_settings().config_path,
        profile_name=profile,
        verbose=verbose,
    )

    logger.debug(
        "CLI invoked",
        command=ctx.invoked_subcommand,
        output_format=output_format.value,
        config_path=str(ctx.obj.config_path),
        profile=profile,
    )


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
