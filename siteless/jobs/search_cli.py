"""CLI client that submits a search to the HTTP service and renders the results."""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional, TextIO

import requests

logger = logging.getLogger(__name__)

RADIUS_CHOICES = (500, 1000, 3000, 5000, 10000, 20000, 50000)
TONE_PRESETS = {
    "warm": "warm and enthusiastic",
    "premium": "upscale, exclusive",
    "direct": "direct and ROI-oriented",
    "creative": "creative and bold",
}
DEFAULT_SERVER_URL = "http://localhost:8080"


def build_payload(
    *,
    query: str,
    location: str,
    radius: int,
    max_results: int,
    vibe: Optional[str],
    tone: Optional[str],
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "query": query,
        "location": location,
        "radius": radius,
        "maxResults": max_results,
    }
    # Blank hints are left out so the service applies its defaults.
    if vibe and vibe.strip():
        payload["vibe"] = vibe
    if tone and tone.strip():
        payload["tone"] = TONE_PRESETS.get(tone, tone)
    return payload


def submit_search(server_url: str, payload: Dict[str, Any], timeout: float = 90) -> requests.Response:
    return requests.post(f"{server_url.rstrip('/')}/api/search", json=payload, timeout=timeout)


def flatten_error(data: Dict[str, Any]) -> str:
    details = data.get("details")
    if isinstance(details, dict) and details:
        messages: List[str] = []
        for field_messages in details.values():
            messages.extend(str(message) for message in field_messages)
        return ", ".join(messages)
    return data.get("error") or "An error occurred."


def render_results(data: Dict[str, Any], out: TextIO) -> None:
    metadata = data.get("metadata") or {}
    businesses = data.get("businesses") or []

    out.write(
        f"{metadata.get('totalWithoutWebsite', 0)} business(es) without a website "
        f"out of {metadata.get('totalFound', 0)} found for \"{metadata.get('query', '')}\" "
        f"({metadata.get('executedAt', '')})\n"
    )
    if not businesses:
        out.write((metadata.get("note") or "No business without a website for this search.") + "\n")
        return

    for index, business in enumerate(businesses, start=1):
        out.write(f"\n{index}. {business.get('name') or business.get('place_id')}\n")
        if business.get("formatted_address"):
            out.write(f"   Address: {business['formatted_address']}\n")
        if business.get("formatted_phone_number"):
            out.write(f"   Phone:   {business['formatted_phone_number']}\n")
        if business.get("rating") is not None:
            out.write(f"   Rating:  {business['rating']} ({business.get('user_ratings_total') or 0} reviews)\n")
        out.write(f"   Maps:    {business.get('googleMapsUrl')}\n")

        pitch = business.get("pitch")
        if pitch:
            out.write(f"   Vibe:    {pitch.get('vibeSummary', '')}\n")
            out.write(f"   Angle:   {pitch.get('angle', '')}\n")
            out.write(f"   Message:\n     {pitch.get('personalizedMessage', '')}\n")
        else:
            out.write("   Pitch:   unavailable (set GROQ_API_KEY on the server to enable it)\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find local businesses without a website")
    parser.add_argument("--query", required=True, help="Business category, e.g. restaurant")
    parser.add_argument("--location", required=True, help="Area to search, e.g. 'Paris, France'")
    parser.add_argument("--radius", type=int, choices=RADIUS_CHOICES, default=5000, help="Search radius in meters")
    parser.add_argument("--max-results", dest="max_results", type=int, choices=range(1, 9), default=5,
                        help="Maximum number of businesses to return")
    parser.add_argument("--vibe", help="Desired style or vibe for the pitches")
    parser.add_argument("--tone", help=f"Pitch tone; presets: {', '.join(TONE_PRESETS)} or free text")
    parser.add_argument("--server-url", dest="server_url", default=DEFAULT_SERVER_URL, help="Search service base URL")
    parser.add_argument("--json", dest="as_json", action="store_true", help="Print the raw JSON response")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    args = build_parser().parse_args(argv)

    payload = build_payload(
        query=args.query,
        location=args.location,
        radius=args.radius,
        max_results=args.max_results,
        vibe=args.vibe,
        tone=args.tone,
    )
    logger.info("Submitting search to %s", args.server_url)

    try:
        response = submit_search(args.server_url, payload)
    except requests.RequestException as exc:
        logger.error("Search request failed: %s", exc)
        sys.stderr.write("Network error, try again in a few moments.\n")
        return 1
    try:
        data = response.json()
    except ValueError:
        sys.stderr.write("The service returned an unreadable response.\n")
        return 1

    if not response.ok:
        sys.stderr.write(flatten_error(data) + "\n")
        return 1

    if args.as_json:
        sys.stdout.write(json.dumps(data, ensure_ascii=False, indent=2) + "\n")
    else:
        render_results(data, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
