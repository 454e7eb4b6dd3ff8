"""
SEEDBED settings, validated with pydantic.

Example:
    SEEDBED = {
        "FIXTURES": [
            "catalog.seed_fixtures.ProductFixture",
            {"class": "accounts.seed_fixtures.AdminFixture", "groups": ["staff"]},
        ],
        "AUTODISCOVER": True,
        "DATABASE": "default",
    }
"""

from __future__ import annotations

from django.conf import settings
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from seedbed.fixtures.exceptions import FixtureConfigurationError


class FixtureEntry(BaseModel):
    """A fixture class registered through settings, with its groups."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    class_path: str = Field(alias="class", min_length=1)
    groups: list[str] = Field(default_factory=list)


class FixtureSettings(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    fixtures: list[FixtureEntry] = Field(default_factory=list, alias="FIXTURES")
    autodiscover: bool = Field(default=True, alias="AUTODISCOVER")
    database: str = Field(default="default", alias="DATABASE", min_length=1)

    @field_validator("fixtures", mode="before")
    @classmethod
    def _coerce_dotted_paths(cls, value):
        # Bare strings are shorthand for {"class": path}.
        if isinstance(value, (list, tuple)):
            return [{"class": item} if isinstance(item, str) else item for item in value]
        return value


def get_fixture_settings() -> FixtureSettings:
    """Read and validate settings.SEEDBED (missing setting means defaults)."""
    raw = getattr(settings, "SEEDBED", None) or {}
    try:
        return FixtureSettings.model_validate(raw)
    except ValidationError as exc:
        raise FixtureConfigurationError(f"Invalid SEEDBED setting: {exc}") from exc
