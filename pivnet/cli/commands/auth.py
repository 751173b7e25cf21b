"""
Authentication Commands.

Commands for storing and removing credentials in the rc file.
"""

from typing import Optional

import typer

from pivnet.api.client import PivnetClient
from pivnet.cli.errors import run_command
from pivnet.cli.state import CLIState
from pivnet.core.config import get_settings, load_rc_file, save_rc_file
from pivnet.core.config_schema import ProfileSchema
from pivnet.core.logging import get_logger, log_with_source

logger = get_logger(__name__)


def login(
    ctx: typer.Context,
    api_token: str = typer.Option(..., "--api-token", help="API token from your Pivotal Network profile"),
    host: Optional[str] = typer.Option(None, "--host", help="API host (default: https://network.pivotal.io)"),
) -> None:
    """
    Log in to Pivotal Network.

    Verifies the API token against the host and stores it in the config file.

    Examples:
        pivnet login --api-token=<token>
        pivnet login --api-token=<token> --host=https://network.pivotal.io
    """
    state: CLIState = ctx.obj
    run_command(_login(state, api_token, host or get_settings().host))
    typer.echo("Logged-in successfully")


async def _login(state: CLIState, api_token: str, host: str) -> None:
    """Async implementation of login command."""
    async with PivnetClient(host=host, api_token=api_token) as client:
        await client.authenticate()

    rc_file = load_rc_file(state.config_path)
    rc_file.set_profile(ProfileSchema(name=state.profile_name, api_token=api_token, host=host))
    save_rc_file(state.config_path, rc_file)

    log_with_source(
        logger,
        "cli",
        "info",
        "Profile saved",
        profile=state.profile_name,
        host=host,
        config_path=str(state.config_path),
    )


def logout(ctx: typer.Context) -> None:
    """
    Log out of Pivotal Network.

    Removes the active profile from the config file.

    Examples:
        pivnet logout
    """
    state: CLIState = ctx.obj
    run_command(_logout(state))
    typer.echo("Logged-out successfully")


async def _logout(state: CLIState) -> None:
    """Async implementation of logout command."""
    rc_file = load_rc_file(state.config_path)
    if rc_file.remove_profile(state.profile_name):
        save_rc_file(state.config_path, rc_file)
        log_with_source(logger, "cli", "info", "Profile removed", profile=state.profile_name)
    else:
        log_with_source(logger, "cli", "debug", "No profile to remove", profile=state.profile_name)
