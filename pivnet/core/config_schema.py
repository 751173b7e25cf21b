"""
Configuration Schemas.

Pydantic models defining the structure of the rc file (~/.pivnetrc).
Unknown keys, missing fields or wrong types raise a ValidationError at load
time instead of a cryptic KeyError deep in a command.

Example rc file:
    profiles:
    - name: default
      api_token: some-api-token
      host: https://network.pivotal.io
"""

from pydantic import BaseModel, ConfigDict


class _StrictBase(BaseModel):
    """Base with extra='forbid' so unknown YAML keys are caught immediately."""

    model_config = ConfigDict(extra="forbid")


class ProfileSchema(_StrictBase):
    name: str
    api_token: str
    host: str


class RCFileSchema(_StrictBase):
    profiles: list[ProfileSchema] = []

    def profile(self, name: str) -> ProfileSchema | None:
        """Return the profile called ``name``, if any."""
        for profile in self.profiles:
            if profile.name == name:
                return profile
        return None

    def set_profile(self, profile: ProfileSchema) -> None:
        """Add ``profile``, replacing any existing profile with the same name."""
        self.remove_profile(profile.name)
        self.profiles.append(profile)

    def remove_profile(self, name: str) -> bool:
        """Remove the profile called ``name``. Returns True if one was removed."""
        remaining = [p for p in self.profiles if p.name != name]
        removed = len(remaining) != len(self.profiles)
        self.profiles = remaining
        return removed
