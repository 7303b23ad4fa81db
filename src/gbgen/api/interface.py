"""Narrow interface over the GrowthBook Features API.

The generator depends on this protocol rather than on FeaturesClient so
tests can hand it an in-memory fake.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from gbgen.api.models import Feature, ListFeaturesResponse


@runtime_checkable
class FeaturesAPI(Protocol):
    """The subset of the Features API used by gbgen."""

    def list_features(
        self, limit: int, offset: int, project_id: str | None = None
    ) -> ListFeaturesResponse | None:
        """GET /features. Returns None when the response carries no payload."""
        ...

    def get_feature_keys(self, project_id: str | None = None) -> list[str]:
        """GET /feature-keys."""
        ...

    def get_feature(self, feature_id: str) -> Feature:
        """GET /features/{id}."""
        ...
