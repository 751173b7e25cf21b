"""
CLI Invocation State.

Global flags parsed by the root callback, shared with every command through
``ctx.obj``.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pivnet.api.client import PivnetClient
from pivnet.core.config import load_rc_file
from pivnet.core.config_schema import ProfileSchema
from pivnet.core.exceptions import NotLoggedInError
from pivnet.core.logging import get_logger

logger = get_logger(__name__)


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"
    YAML = "yaml"


@dataclass
class CLIState:
    """Options given before the command name."""

    output_format: OutputFormat
    config_path: Path
    profile_name: str
    verbose: bool = False

    def current_profile(self) -> ProfileSchema:
        """
        Return the active profile from the rc file.

        Raises:
            NotLoggedInError: If the profile does not exist
            ConfigurationError: If the rc file is invalid
        """
        profile = load_rc_file(self.config_path).profile(self.profile_name)
        if profile is None:
            logger.debug(
                "No profile in config file",
                profile=self.profile_name,
                config_path=str(self.config_path),
            )
            raise NotLoggedInError()
        return profile

    @asynccontextmanager
    async def authenticated_client(self) -> AsyncIterator[PivnetClient]:
        """Client for the active profile, with its token already verified."""
        profile = self.current_profile()
        async with PivnetClient(host=profile.host, api_token=profile.api_token) as client:
            await client.authenticate()
            yield client
