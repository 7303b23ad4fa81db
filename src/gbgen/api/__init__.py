"""GrowthBook Features API access."""

from gbgen.api.client import FeaturesClient, normalize_base_url
from gbgen.api.exceptions import APIAuthError, APIError
from gbgen.api.interface import FeaturesAPI
from gbgen.api.models import (
    Feature,
    FeatureEnvironment,
    FeatureValueType,
    ListFeaturesResponse,
)

__all__ = [
    "APIAuthError",
    "APIError",
    "Feature",
    "FeatureEnvironment",
    "FeatureValueType",
    "FeaturesAPI",
    "FeaturesClient",
    "ListFeaturesResponse",
    "normalize_base_url",
]
