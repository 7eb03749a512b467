"""Concurrent Places details enrichment and the no-website filter."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Optional, Sequence

from siteless.etl.transform import build_maps_url, to_place_details
from siteless.models import EnrichedBusiness, PlaceDetails
from siteless.vendors import google_places

logger = logging.getLogger(__name__)

# Detail lookups per desired result; compensates for the website filter.
OVERFETCH_FACTOR = 2


def _fetch_one(place_id: str, api_key: str, timeout: float) -> Optional[PlaceDetails]:
    result = google_places.place_details(place_id=place_id, api_key=api_key, timeout=timeout)
    return to_place_details(result, fallback_place_id=place_id)


def _collect_settled(place_ids: Sequence[str], futures: Sequence[Future]) -> List[PlaceDetails]:
    """Wait for every future, keeping successful results in submission order."""
    collected: List[PlaceDetails] = []
    for place_id, future in zip(place_ids, futures):
        try:
            details = future.result()
        except Exception as exc:  # noqa: BLE001
            logger.warning("Failed to fetch details for %s: %s", place_id, exc)
            continue
        if details is None:
            logger.warning("Empty details payload for %s", place_id)
            continue
        collected.append(details)
    return collected


def fetch_details(place_ids: Sequence[str], api_key: str, *, timeout: float = 10, max_workers: int = 8) -> List[PlaceDetails]:
    if not place_ids:
        return []
    workers = max(1, min(max_workers, len(place_ids)))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="place-details") as executor:
        futures = [executor.submit(_fetch_one, place_id, api_key, timeout) for place_id in place_ids]
        return _collect_settled(place_ids, futures)


def enrich_candidates(
    place_ids: Sequence[str],
    api_key: str,
    max_results: int,
    *,
    timeout: float = 10,
    max_workers: int = 8,
) -> List[EnrichedBusiness]:
    """Fetch details for the leading candidates and keep those without a website."""
    subset = list(place_ids[: max_results * OVERFETCH_FACTOR])
    logger.info("Fetching details for %d of %d candidates", len(subset), len(place_ids))

    details = fetch_details(subset, api_key, timeout=timeout, max_workers=max_workers)
    without_website = [item for item in details if not item.has_website]
    logger.info("%d of %d detailed candidates have no website", len(without_website), len(details))

    return [
        EnrichedBusiness(details=item, google_maps_url=build_maps_url(item.place_id))
        for item in without_website[:max_results]
    ]
