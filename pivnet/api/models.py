"""
API Response Models.

Records returned by the Pivotal Network API. Fields the CLI does not use
(e.g. ``_links``) are dropped on parse.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class _ApiModel(BaseModel):
    """Base for API records. Ignores unknown fields so API additions don't break parsing."""

    model_config = ConfigDict(extra="ignore")

    def to_output(self) -> dict[str, Any]:
        """Plain dict for JSON/YAML rendering, without unset optional fields."""
        return self.model_dump(mode="json", exclude_none=True)


class Product(_ApiModel):
    """A product listed on Pivotal Network."""

    id: int
    slug: str
    name: str


class Release(_ApiModel):
    """A release of a product."""

    id: int
    version: str
    release_type: str | None = None
    release_date: str | None = None
    release_notes_url: str | None = None
    availability: str | None = None
    description: str | None = None
    end_of_support_date: str | None = None
