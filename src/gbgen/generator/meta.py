"""Feature metadata fetching.

Pages through GET /features and builds the catalog the renderers work
from, sorted by feature id so generated output is stable across runs.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from operator import attrgetter

from gbgen.api.interface import FeaturesAPI
from gbgen.api.models import Feature
from gbgen.generator.exceptions import (
    EmptyResponseError,
    GenerationCancelledError,
    PaginationStalledError,
)

logger = logging.getLogger(__name__)

PAGE_SIZE = 100


@dataclass(frozen=True)
class FeatureMeta:
    """Generation-relevant metadata of one feature."""

    id: str
    description: str
    value_type: str
    no_active_environments: bool

    @classmethod
    def from_feature(cls, feature: Feature) -> FeatureMeta:
        return cls(
            id=feature.id,
            description=feature.description,
            value_type=feature.value_type,
            no_active_environments=feature.has_no_active_environments,
        )


@dataclass(frozen=True)
class NamedFeature:
    """FeatureMeta plus the identifier it is exported under."""

    name: str
    id: str
    description: str
    value_type: str
    no_active_environments: bool


def check_cancelled(
    cancel_event: threading.Event | None = None,
    deadline: float | None = None,
) -> None:
    """Raise GenerationCancelledError if cancelled or past the deadline.

    Args:
        cancel_event: Set by another thread to request cancellation.
        deadline: time.monotonic() value after which work must stop.
    """
    if cancel_event is not None and cancel_event.is_set():
        raise GenerationCancelledError("feature fetch cancelled")
    if deadline is not None and time.monotonic() >= deadline:
        raise GenerationCancelledError("feature fetch exceeded its deadline")


def fetch_all_feature_meta(
    api: FeaturesAPI,
    project_id: str | None = None,
    *,
    cancel_event: threading.Event | None = None,
    deadline: float | None = None,
    page_size: int = PAGE_SIZE,
) -> list[FeatureMeta]:
    """Fetch every feature and return the catalog sorted by id.

    Pages are requested one after another. The next offset is the server's
    nextOffset when it sends one, otherwise the requested offset plus the
    number of features on the page. Cancellation is checked before each
    request.

    Args:
        api: Features API implementation.
        project_id: Optional project filter.
        cancel_event: Optional cancellation signal.
        deadline: Optional time.monotonic() deadline.
        page_size: Features requested per page.

    Returns:
        All features with a non-empty id, sorted ascending by id.

    Raises:
        APIError: If any request fails.
        EmptyResponseError: If a page has no payload.
        PaginationStalledError: If more pages are reported but the offset
            does not move forward.
        GenerationCancelledError: If cancelled or past the deadline.
    """
    offset = 0
    pages = 0
    catalog: list[FeatureMeta] = []

    while True:
        check_cancelled(cancel_event, deadline)

        page = api.list_features(page_size, offset, project_id)
        if page is None:
            raise EmptyResponseError(
                f"list features: empty response at offset {offset}"
            )
        pages += 1

        skipped = 0
        for feature in page.features:
            if not feature.id:
                skipped += 1
                continue
            catalog.append(FeatureMeta.from_feature(feature))

        logger.debug(
            "Fetched features page (skipped=%d, has_more=%s)",
            skipped,
            page.has_more,
            extra={
                "project_id": project_id,
                "page": pages,
                "offset": offset,
                "count": len(page.features),
            },
        )

        if not page.has_more:
            break

        if page.next_offset is not None:
            next_offset = page.next_offset
        else:
            next_offset = offset + len(page.features)
        if next_offset <= offset:
            raise PaginationStalledError(offset, next_offset)
        offset = next_offset

    catalog.sort(key=attrgetter("id"))
    logger.info(
        "Fetched feature catalog",
        extra={"project_id": project_id, "page": pages, "features": len(catalog)},
    )
    return catalog
