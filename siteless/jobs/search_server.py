"""HTTP entrypoint for the no-website business search (Cloud Run friendly)."""

from __future__ import annotations

import logging
import os
from typing import Any

from flask import Flask, jsonify, request

from siteless.core.config import ConfigError, get_settings, require_google_api_key
from siteless.core.pitch_generator import build_pitch_generator
from siteless.core.search import run_search
from siteless.etl.transform import response_to_dict
from siteless.schemas import RequestValidationError, parse_search_request
from siteless.vendors.google_places import GoogleMapsError

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

# ---------- App ----------
app = Flask(__name__)

GENERIC_ERROR = "An unexpected error occurred."

# ---------- Routes ----------


@app.get("/")
def root() -> Any:
    """Simple root to avoid 404 on GET /"""
    return "ok", 200


@app.get("/healthz")
def healthcheck() -> Any:
    """Lightweight health endpoint; reads env-based settings only."""
    settings = get_settings()
    return (
        jsonify(
            {
                "status": "ok",
                "pitchGeneration": "enabled" if settings.pitch_generation_enabled else "disabled",
                "revision": os.getenv("K_REVISION", "unknown"),
            }
        ),
        200,
    )


@app.post("/api/search")
def search() -> Any:
    """
    Find nearby businesses without a website and attach outreach pitches.
    Required JSON fields: query, location
    Optional: radius (int), maxResults (int), vibe (str), tone (str)
    """
    settings = get_settings()
    try:
        require_google_api_key(settings)
    except ConfigError as exc:
        logger.error("%s", exc)
        return jsonify({"error": str(exc)}), 500

    payload: Any = request.get_json(force=True, silent=True)
    if payload is None:
        return jsonify({"error": "Invalid request.", "details": {"body": ["Request body must be valid JSON."]}}), 400

    try:
        search_request = parse_search_request(payload)
    except RequestValidationError as exc:
        return jsonify({"error": exc.message, "details": exc.details}), 400

    try:
        result = run_search(search_request, settings, pitch_generator=build_pitch_generator(settings))
    except GoogleMapsError as exc:
        return jsonify({"error": str(exc)}), 500
    except Exception as exc:  # noqa: BLE001
        logger.exception("Search failed for query=%s: %s", search_request.query, exc)
        return jsonify({"error": GENERIC_ERROR}), 500

    return jsonify(response_to_dict(result)), 200


def main() -> None:
    """
    Cloud Run injects PORT (usually 8080); fall back to settings for local runs.
    """
    settings = get_settings()
    logging.getLogger().setLevel(settings.log_level)

    port = int(os.getenv("PORT") or settings.port)
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
