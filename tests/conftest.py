"""Shared test fixtures for gbgen."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import pytest

from gbgen.api.interface import FeaturesAPI
from gbgen.api.models import ListFeaturesResponse
from gbgen.config.models import GBGenConfig, GeneratorConfig, GrowthBookConfig


def feature_payload(
    feature_id: str,
    value_type: str = "boolean",
    description: str = "",
    environments: dict[str, bool] | None = None,
) -> dict[str, Any]:
    """Build one feature object as the API returns it.

    environments maps environment name to its enabled flag; the default is a
    single enabled production environment.
    """
    if environments is None:
        environments = {"production": True}
    return {
        "id": feature_id,
        "description": description,
        "valueType": value_type,
        "environments": {
            name: {"enabled": enabled} for name, enabled in environments.items()
        },
    }


def page_payload(
    features: list[dict[str, Any]],
    has_more: bool = False,
    next_offset: int | None = None,
    offset: int = 0,
) -> dict[str, Any]:
    """Build one GET /features page body."""
    body: dict[str, Any] = {
        "features": features,
        "limit": 100,
        "offset": offset,
        "count": len(features),
        "total": len(features),
        "hasMore": has_more,
    }
    if next_offset is not None:
        body["nextOffset"] = next_offset
    return body


@pytest.fixture
def make_feature() -> Callable[..., dict[str, Any]]:
    """Return the feature_payload factory."""
    return feature_payload


@pytest.fixture
def make_page_body() -> Callable[..., dict[str, Any]]:
    """Return the page_payload factory."""
    return page_payload


@pytest.fixture
def make_page() -> Callable[..., ListFeaturesResponse]:
    """Return a factory building ListFeaturesResponse pages."""

    def _make(
        features: list[dict[str, Any]],
        has_more: bool = False,
        next_offset: int | None = None,
        offset: int = 0,
    ) -> ListFeaturesResponse:
        return ListFeaturesResponse.model_validate(
            page_payload(features, has_more, next_offset, offset)
        )

    return _make


@pytest.fixture
def mock_api() -> MagicMock:
    """Create a mock FeaturesAPI. Set list_features.side_effect to pages."""
    return MagicMock(spec=FeaturesAPI)


@pytest.fixture
def example_features() -> list[dict[str, Any]]:
    """One active and one fully disabled boolean feature."""
    return [
        feature_payload("disabled-feature", environments={"production": False}),
        feature_payload("checkout-redesign"),
    ]


@pytest.fixture
def gbgen_config(tmp_path) -> GBGenConfig:
    """Create a valid config writing into a temp directory."""
    return GBGenConfig(
        growthbook=GrowthBookConfig(
            api_base_url="https://gb.example.com",
            api_key="secret_test",  # pragma: allowlist secret
        ),
        generator=GeneratorConfig(
            output_dir=str(tmp_path / "out"),
            package_name="growthbooktypes",
        ),
    )


@pytest.fixture
def reset_root_logger():
    """Save and restore root logger state around a test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers[:] = original_handlers
    root.setLevel(original_level)
