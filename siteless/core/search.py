"""Search orchestration: geocode, text search, enrich, filter, pitch and assemble."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional, Union

from siteless.core.config import Settings, require_google_api_key
from siteless.core.enricher import enrich_candidates
from siteless.core.pitch_generator import DisabledPitchGenerator, GroqPitchGenerator, build_pitch_generator
from siteless.etl.transform import to_place_summary
from siteless.models import Coordinates, EnrichedBusiness, PlaceSummary, SearchMetadata, SearchResponse
from siteless.schemas import SearchRequest
from siteless.vendors import google_places

logger = logging.getLogger(__name__)

NOTE_NO_RESULTS = "No businesses found for this combination."
NOTE_ALL_HAVE_WEBSITES = "The businesses found already have a website."


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def find_places(request: SearchRequest, coords: Coordinates, api_key: str, timeout: float) -> List[PlaceSummary]:
    results = google_places.text_search(
        query=request.query, location=coords, radius=request.radius, api_key=api_key, timeout=timeout
    )
    summaries = [summary for summary in (to_place_summary(result) for result in results) if summary is not None]
    logger.info("Places text search returned %d candidates for query=%s", len(summaries), request.query)
    return summaries


def _empty_response(request: SearchRequest, coords: Coordinates, total_found: int, note: str) -> SearchResponse:
    return SearchResponse(
        businesses=[],
        metadata=SearchMetadata(
            total_found=total_found,
            total_without_website=0,
            location=coords,
            query=request.query,
            executed_at=_now_iso(),
            note=note,
        ),
    )


def run_search(
    request: SearchRequest,
    settings: Settings,
    pitch_generator: Optional[Union[DisabledPitchGenerator, GroqPitchGenerator]] = None,
) -> SearchResponse:
    """Run one search request end to end.

    Upstream failures surface as `LocationResolutionError` or
    `PlacesSearchError`; empty searches and fully filtered results are
    returned as normal responses with an explanatory note.
    """
    api_key = require_google_api_key(settings)
    timeout = settings.request_timeout

    logger.info(
        "Running search query=%s location=%s radius=%d max_results=%d",
        request.query,
        request.location,
        request.radius,
        request.maxResults,
    )
    coords = google_places.geocode(request.location, api_key=api_key, timeout=timeout)
    summaries = find_places(request, coords, api_key, timeout)
    if not summaries:
        return _empty_response(request, coords, 0, NOTE_NO_RESULTS)

    businesses: List[EnrichedBusiness] = enrich_candidates(
        [summary.place_id for summary in summaries],
        api_key,
        request.maxResults,
        timeout=timeout,
        max_workers=settings.detail_fetch_workers,
    )
    if not businesses:
        return _empty_response(request, coords, len(summaries), NOTE_ALL_HAVE_WEBSITES)

    generator = pitch_generator if pitch_generator is not None else build_pitch_generator(settings)
    pitches = generator.generate(businesses, query=request.query, vibe=request.vibe, tone=request.tone)
    for business in businesses:
        business.pitch = pitches.get(business.place_id)

    pitches_generated: Optional[int] = None
    if generator.enabled:
        pitches_generated = sum(1 for business in businesses if business.pitch is not None)

    return SearchResponse(
        businesses=businesses,
        metadata=SearchMetadata(
            total_found=len(summaries),
            total_without_website=len(businesses),
            location=coords,
            query=request.query,
            executed_at=_now_iso(),
            pitches_generated=pitches_generated,
        ),
    )
