"""Client utilities for the Google Geocoding and Places APIs."""

import logging
from typing import Any, Dict, List

import requests

from siteless.models import Coordinates

logger = logging.getLogger(__name__)
_SESSION = requests.Session()
_BASE_URL = "https://maps.googleapis.com/maps/api/place"
_GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"

DETAIL_FIELDS = (
    "place_id",
    "name",
    "formatted_address",
    "formatted_phone_number",
    "website",
    "rating",
    "user_ratings_total",
    "business_status",
    "types",
    "opening_hours",
    "editorial_summary",
    "reviews",
)


class GoogleMapsError(RuntimeError):
    """Base class for failures talking to Google Maps Platform."""


class LocationResolutionError(GoogleMapsError):
    """Raised when a free-text location cannot be geocoded."""


class PlacesSearchError(GoogleMapsError):
    """Raised when the Places text search fails or returns an unexpected status."""


def geocode(address: str, api_key: str, timeout: float = 10) -> Coordinates:
    """Resolve an address to the coordinates of the first geocoding match."""
    params = {"address": address, "key": api_key}
    try:
        response = _SESSION.get(_GEOCODE_URL, params=params, timeout=timeout)
        response.raise_for_status()
        payload = response.json()
    except (requests.RequestException, ValueError) as exc:
        logger.error("geocode request failed for %r: %s", address, exc)
        raise LocationResolutionError("Unable to locate this area.") from exc

    if not isinstance(payload, dict):
        logger.error("geocode returned a non-object payload: %.200r", payload)
        raise LocationResolutionError("Unable to locate this area.")

    status = payload.get("status")
    results = payload.get("results") or []
    if status != "OK" or not isinstance(results, list) or not results or not isinstance(results[0], dict):
        logger.error("geocode failed: status=%s, error_message=%s", status, payload.get("error_message"))
        raise LocationResolutionError("Unable to locate this area.")

    # First match wins; ambiguous addresses are not disambiguated.
    try:
        location = results[0]["geometry"]["location"]
        return Coordinates(lat=float(location["lat"]), lng=float(location["lng"]))
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise LocationResolutionError("Unable to locate this area.") from exc


def text_search(query: str, location: Coordinates, radius: int, api_key: str, timeout: float = 10) -> List[Dict[str, Any]]:
    params = {
        "query": query,
        "location": f"{location.lat},{location.lng}",
        "radius": str(radius),
        "key": api_key,
    }
    try:
        response = _SESSION.get(f"{_BASE_URL}/textsearch/json", params=params, timeout=timeout)
        response.raise_for_status()
        payload = response.json()
    except (requests.RequestException, ValueError) as exc:
        logger.error("text_search request failed: %s", exc)
        raise PlacesSearchError("Google Places search failed.") from exc

    if not isinstance(payload, dict):
        logger.error("text_search returned a non-object payload: %.200r", payload)
        raise PlacesSearchError("Google Places returned an unexpected response.")

    status = payload.get("status")
    if status not in {"OK", "ZERO_RESULTS"}:
        logger.error("text_search failed: status=%s, error_message=%s", status, payload.get("error_message"))
        raise PlacesSearchError(payload.get("error_message") or "Google Places returned an unexpected response.")
    results = payload.get("results") or []
    if not isinstance(results, list):
        raise PlacesSearchError("Google Places returned an unexpected response.")
    return [result for result in results if isinstance(result, dict)]


def place_details(place_id: str, api_key: str, timeout: float = 10) -> Dict[str, Any]:
    params = {"place_id": place_id, "key": api_key, "fields": ",".join(DETAIL_FIELDS)}
    response = _SESSION.get(f"{_BASE_URL}/details/json", params=params, timeout=timeout)
    response.raise_for_status()
    payload = response.json()
    status = payload.get("status")
    if status != "OK":
        logger.error("place_details failed: status=%s, error_message=%s", status, payload.get("error_message"))
        raise GoogleMapsError(payload.get("error_message") or status)
    return payload.get("result") or {}
