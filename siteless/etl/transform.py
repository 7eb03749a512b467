"""Utilities for transforming Google Places responses into pipeline records and JSON payloads."""

import logging
from typing import Any, Dict, Iterable, List, Optional

from siteless.models import EnrichedBusiness, PlaceDetails, PlaceSummary, Review, SearchMetadata, SearchResponse

logger = logging.getLogger(__name__)

_MAPS_PLACE_URL = "https://www.google.com/maps/place/?q=place_id:{place_id}"
_REVIEW_SAMPLES = 2


def build_maps_url(place_id: str) -> str:
    return _MAPS_PLACE_URL.format(place_id=place_id)


def _as_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.debug("Unable to parse numeric value %r", value)
        return None


def _as_int(value: Any) -> Optional[int]:
    number = _as_float(value)
    return int(number) if number is not None else None


def _as_types(types: Optional[Iterable[Any]]) -> List[str]:
    return [str(type_name) for type_name in types or []]


def to_place_summary(result: Dict[str, Any]) -> Optional[PlaceSummary]:
    if not isinstance(result, dict):
        logger.debug("Skipping non-object search result: %r", result)
        return None
    place_id = result.get("place_id")
    if not place_id:
        logger.debug("Skipping result without place_id: %s", result)
        return None
    return PlaceSummary(
        place_id=place_id,
        name=result.get("name"),
        formatted_address=result.get("formatted_address"),
        rating=_as_float(result.get("rating")),
        user_ratings_total=_as_int(result.get("user_ratings_total")),
        business_status=result.get("business_status"),
        types=_as_types(result.get("types")),
    )


def to_place_details(result: Dict[str, Any], fallback_place_id: Optional[str] = None) -> Optional[PlaceDetails]:
    """Build a PlaceDetails record, or None when the payload is empty."""
    place_id = result.get("place_id") or fallback_place_id
    if not result or not place_id:
        return None

    reviews = [
        Review(author_name=review.get("author_name"), text=review.get("text"), rating=_as_float(review.get("rating")))
        for review in result.get("reviews") or []
        if isinstance(review, dict)
    ]
    opening_hours = result.get("opening_hours") or {}
    editorial_summary = result.get("editorial_summary") or {}

    return PlaceDetails(
        place_id=place_id,
        name=result.get("name"),
        formatted_address=result.get("formatted_address"),
        formatted_phone_number=result.get("formatted_phone_number"),
        website=result.get("website"),
        rating=_as_float(result.get("rating")),
        user_ratings_total=_as_int(result.get("user_ratings_total")),
        business_status=result.get("business_status"),
        types=_as_types(result.get("types")),
        weekday_text=opening_hours.get("weekday_text"),
        editorial_overview=editorial_summary.get("overview"),
        reviews=reviews,
    )


def to_pitch_prompt_item(details: PlaceDetails) -> Dict[str, Any]:
    """Summarize a business for the pitch-generation payload."""
    return {
        "placeId": details.place_id,
        "name": details.name,
        "address": details.formatted_address,
        "phone": details.formatted_phone_number,
        "rating": details.rating,
        "reviews": details.user_ratings_total,
        "types": details.types,
        "summary": details.editorial_overview,
        "reviewsSamples": [
            {"author_name": review.author_name, "text": review.text, "rating": review.rating}
            for review in details.reviews[:_REVIEW_SAMPLES]
        ],
    }


def _drop_none(values: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


def business_to_dict(business: EnrichedBusiness) -> Dict[str, Any]:
    details = business.details
    row = _drop_none(
        {
            "place_id": details.place_id,
            "name": details.name,
            "formatted_address": details.formatted_address,
            "formatted_phone_number": details.formatted_phone_number,
            "rating": details.rating,
            "user_ratings_total": details.user_ratings_total,
            "business_status": details.business_status,
            "types": details.types,
        }
    )
    if details.weekday_text:
        row["opening_hours"] = {"weekday_text": list(details.weekday_text)}
    if details.editorial_overview:
        row["editorial_summary"] = {"overview": details.editorial_overview}
    if details.reviews:
        row["reviews"] = [
            _drop_none({"author_name": review.author_name, "text": review.text, "rating": review.rating})
            for review in details.reviews
        ]
    row["googleMapsUrl"] = business.google_maps_url
    pitch = business.pitch
    row["pitch"] = (
        {
            "placeId": pitch.place_id,
            "vibeSummary": pitch.vibe_summary,
            "angle": pitch.angle,
            "personalizedMessage": pitch.personalized_message,
        }
        if pitch is not None
        else None
    )
    return row


def metadata_to_dict(metadata: SearchMetadata) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "totalFound": metadata.total_found,
        "totalWithoutWebsite": metadata.total_without_website,
        "location": metadata.location.as_dict(),
        "query": metadata.query,
        "executedAt": metadata.executed_at,
    }
    if metadata.note:
        payload["note"] = metadata.note
    if metadata.pitches_generated is not None:
        payload["pitchesGenerated"] = metadata.pitches_generated
    return payload


def response_to_dict(response: SearchResponse) -> Dict[str, Any]:
    return {
        "businesses": [business_to_dict(business) for business in response.businesses],
        "metadata": metadata_to_dict(response.metadata),
    }
