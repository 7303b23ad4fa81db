"""Pydantic models for the GrowthBook Features API.

Only the fields gbgen needs are declared; anything else in a payload is
ignored. ``value_type`` is kept as a plain string so an unknown value type
surfaces when rendering typed helpers rather than when fetching.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FeatureValueType(StrEnum):
    """Value types GrowthBook features can have."""

    BOOLEAN = "boolean"
    STRING = "string"
    NUMBER = "number"
    JSON = "json"


class FeatureEnvironment(BaseModel):
    """Per-environment settings of a feature (subset)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    enabled: bool = False


class Feature(BaseModel):
    """A feature flag as returned by the API (subset of fields)."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    id: str = ""
    description: str = ""
    value_type: str = Field(default="", alias="valueType")
    environments: dict[str, FeatureEnvironment] = Field(default_factory=dict)

    @field_validator("id", "description", "value_type", mode="before")
    @classmethod
    def null_to_empty_string(cls, v: Any) -> Any:
        """The API sends null for unset text fields."""
        return "" if v is None else v

    @field_validator("environments", mode="before")
    @classmethod
    def null_to_empty_environments(cls, v: Any) -> Any:
        return {} if v is None else v

    @property
    def has_no_active_environments(self) -> bool:
        """True when no environment exists or every environment is disabled."""
        return not any(env.enabled for env in self.environments.values())


class ListFeaturesResponse(BaseModel):
    """One page of GET /features."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    features: list[Feature] = Field(default_factory=list)
    limit: int = 0
    offset: int = 0
    count: int = 0
    total: int = 0
    has_more: bool = Field(default=False, alias="hasMore")
    next_offset: int | None = Field(default=None, alias="nextOffset")

    @field_validator("features", mode="before")
    @classmethod
    def null_to_empty_features(cls, v: Any) -> Any:
        return [] if v is None else v
