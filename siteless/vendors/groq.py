"""Minimal client for Groq's OpenAI-compatible chat completions endpoint."""

import logging
from typing import Any, Dict, List

import requests

logger = logging.getLogger(__name__)
_SESSION = requests.Session()


class PitchGenerationError(RuntimeError):
    """Raised when the chat completion cannot be obtained."""


def chat_completion(
    messages: List[Dict[str, str]],
    *,
    api_key: str,
    api_url: str,
    model: str,
    temperature: float = 0.4,
    max_tokens: int = 1200,
    timeout: float = 30,
) -> str:
    """POST a chat completion request and return the first choice's content."""
    payload: Dict[str, Any] = {
        "model": model,
        "temperature": temperature,
        "max_tokens": max_tokens,
        "messages": messages,
    }
    headers = {"Content-Type": "application/json", "Authorization": f"Bearer {api_key}"}
    try:
        response = _SESSION.post(api_url, json=payload, headers=headers, timeout=timeout)
    except requests.RequestException as exc:
        raise PitchGenerationError(f"chat completion request failed: {exc}") from exc

    if not (200 <= response.status_code < 300):
        raise PitchGenerationError(f"chat completion returned status {response.status_code}: {response.text[:300]}")

    try:
        data = response.json()
        content = data["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError) as exc:
        raise PitchGenerationError("chat completion response was malformed") from exc
    if not isinstance(content, str):
        raise PitchGenerationError("chat completion content is not text")

    logger.debug("chat completion returned %d characters", len(content))
    return content
