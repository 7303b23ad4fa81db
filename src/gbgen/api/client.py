"""GrowthBook REST API client.

This module provides an HTTP client for the GrowthBook v1 API, covering the
feature listing endpoints gbgen generates code from. Retries are not
attempted; any failure is reported to the caller as an APIError.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from gbgen.api.exceptions import APIAuthError, APIError
from gbgen.api.models import Feature, ListFeaturesResponse
from gbgen.config.models import GrowthBookConfig

logger = logging.getLogger(__name__)

API_PATH = "/api/v1"


def normalize_base_url(url: str) -> str:
    """Strip trailing slashes and make sure the URL ends with /api/v1.

    >>> normalize_base_url("https://api.growthbook.io/")
    'https://api.growthbook.io/api/v1'
    """
    base = url.rstrip("/")
    if not base.endswith(API_PATH):
        base += API_PATH
    return base


def _project_params(project_id: str | None) -> dict[str, str]:
    if project_id:
        return {"projectId": project_id}
    return {}


class FeaturesClient:
    """HTTP client for the GrowthBook Features API.

    Implements gbgen.api.interface.FeaturesAPI. The underlying httpx.Client
    is created on first use; close() or the context manager releases it.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout_seconds: float = 30,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API base URL, normalized with normalize_base_url().
            api_key: Secret API key, sent as a bearer token.
            timeout_seconds: Per-request timeout.
            transport: Optional httpx transport (tests use httpx.MockTransport).
        """
        self._base_url = normalize_base_url(base_url)
        self._api_key = api_key
        self._timeout = timeout_seconds
        self._transport = transport
        self._client: httpx.Client | None = None

    @classmethod
    def from_config(
        cls,
        config: GrowthBookConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> FeaturesClient:
        return cls(
            config.api_base_url,
            config.api_key,
            timeout_seconds=config.timeout_seconds,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def __enter__(self) -> FeaturesClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self._base_url,
                timeout=self._timeout,
                headers=self._headers(),
                transport=self._transport,
            )
        return self._client

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Accept": "application/json",
        }

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def _get_json(self, path: str, params: dict[str, Any], what: str) -> Any:
        """GET a path and decode its JSON body.

        Returns:
            Decoded JSON, or None when the body is empty.

        Raises:
            APIAuthError: If the API key is rejected (401/403).
            APIError: On transport failure, other HTTP errors, or invalid JSON.
        """
        client = self._get_client()
        try:
            response = client.get(path, params=params)
            if response.status_code in (401, 403):
                raise APIAuthError(
                    f"{what}: API key rejected (HTTP {response.status_code})",
                    status_code=response.status_code,
                )
            response.raise_for_status()
        except httpx.ConnectError as e:
            raise APIError(f"{what}: cannot connect to GrowthBook: {e}") from e
        except httpx.TimeoutException as e:
            raise APIError(f"{what}: request timed out: {e}") from e
        except httpx.HTTPStatusError as e:
            raise APIError(
                f"{what}: HTTP error: {e}", status_code=e.response.status_code
            ) from e
        except httpx.HTTPError as e:
            raise APIError(f"{what}: request failed: {e}") from e

        if not response.content.strip():
            return None
        try:
            return response.json()
        except ValueError as e:
            raise APIError(f"{what}: invalid JSON response: {e}") from e

    def list_features(
        self, limit: int, offset: int, project_id: str | None = None
    ) -> ListFeaturesResponse | None:
        """List one page of features.

        Args:
            limit: Page size.
            offset: Number of features to skip.
            project_id: Optional project filter; empty means all projects.

        Returns:
            The page, or None if the response had no payload.

        Raises:
            APIError: If the request fails or the payload is malformed.
        """
        params: dict[str, Any] = {"limit": limit, "offset": offset}
        params.update(_project_params(project_id))
        data = self._get_json("/features", params, "list features")
        if data is None:
            return None
        try:
            return ListFeaturesResponse.model_validate(data)
        except ValidationError as e:
            raise APIError(f"list features: unexpected response: {e}") from e

    def get_feature_keys(self, project_id: str | None = None) -> list[str]:
        """List the ids of all features.

        Raises:
            APIError: If the request fails or the payload is not a list of strings.
        """
        data = self._get_json(
            "/feature-keys", _project_params(project_id), "get feature keys"
        )
        if data is None:
            return []
        if not isinstance(data, list) or not all(isinstance(k, str) for k in data):
            raise APIError("get feature keys: expected a list of strings")
        return data

    def get_feature(self, feature_id: str) -> Feature:
        """Fetch a single feature by id.

        Raises:
            APIError: If the request fails or the payload is malformed.
        """
        what = f"get feature {feature_id!r}"
        data = self._get_json(f"/features/{quote(feature_id, safe='')}", {}, what)
        if not isinstance(data, dict) or not isinstance(data.get("feature"), dict):
            raise APIError(f"{what}: response has no feature object")
        try:
            return Feature.model_validate(data["feature"])
        except ValidationError as e:
            raise APIError(f"{what}: unexpected response: {e}") from e
