"""
Template models - the on-disk shape of a progression template.

Patterns are stored as space-separated chord strings, one per pattern,
so a template file stays readable:

    schema: template/v1
    name: default
    resolution: 8
    major:
      - "I V vi IV"
    minor:
      - "i VI III VII"
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from dust_chords.constants import DEFAULT_RESOLUTION, TEMPLATE_SCHEMA
from dust_chords.core.timing import Resolution


class TemplateConfig(BaseModel):
    """
    Validated template configuration.

    Chord strings are checked for shape here; parsing them into chords
    happens when the template is built.
    """

    schema_version: str = Field(TEMPLATE_SCHEMA, description="Schema version")
    name: str = Field(..., description="Template name")
    description: str = Field("", description="Human-readable description")
    resolution: int = Field(DEFAULT_RESOLUTION, description="Ticks per bar (4, 8, 16 or 32)")
    major: list[str] = Field(default_factory=list, description="Patterns for major keys")
    minor: list[str] = Field(default_factory=list, description="Patterns for minor keys")

    model_config = {"frozen": True}

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Ensure template name is a usable file stem."""
        if not v or not v.replace("_", "").replace("-", "").isalnum():
            raise ValueError(f"Invalid template name: {v}")
        return v

    @field_validator("resolution")
    @classmethod
    def validate_resolution(cls, v: int) -> int:
        """Resolution must be one of the supported grid sizes."""
        allowed = [r.value for r in Resolution]
        if v not in allowed:
            raise ValueError(f"Resolution must be one of {allowed}, got {v}")
        return v

    @field_validator("major", "minor")
    @classmethod
    def validate_patterns(cls, v: list[str]) -> list[str]:
        """Each pattern must hold at least one chord."""
        for pattern in v:
            if not pattern.split():
                raise ValueError("Patterns must contain at least one chord")
        return [" ".join(pattern.split()) for pattern in v]

    def to_yaml_dict(self) -> dict[str, Any]:
        """
        Convert to a YAML-friendly dict.

        This produces the canonical YAML format for templates.
        """
        data: dict[str, Any] = {
            "schema": self.schema_version,
            "name": self.name,
        }
        if self.description:
            data["description"] = self.description
        data["resolution"] = self.resolution
        data["major"] = list(self.major)
        data["minor"] = list(self.minor)
        return data

    @classmethod
    def from_yaml_dict(cls, data: dict[str, Any]) -> TemplateConfig:
        """Create from a YAML-loaded dict."""
        return cls(
            schema_version=data.get("schema", TEMPLATE_SCHEMA),
            name=data["name"],
            description=data.get("description", ""),
            resolution=data.get("resolution", DEFAULT_RESOLUTION),
            major=data.get("major") or [],
            minor=data.get("minor") or [],
        )
