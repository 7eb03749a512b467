"""Optional LLM pitch generation for businesses without a website.

Pitches are an enhancement, never a hard dependency: `build_pitch_generator`
is the single place where the Groq credential is checked, and every failure
past that point (transport, status, unparseable output) degrades to an empty
pitch map.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Union

from siteless.core.config import Settings
from siteless.etl.transform import to_pitch_prompt_item
from siteless.models import EnrichedBusiness, Pitch
from siteless.vendors import groq

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a business strategist specialised in sales prospecting for web agencies. "
    "Output valid JSON only."
)
DEFAULT_TONE = "Use a confident, empathetic and results-oriented tone."
RESPONSE_FORMAT = '{"businesses":[{"placeId":"","vibeSummary":"","angle":"","personalizedMessage":""}]}'
TEMPERATURE = 0.4
MAX_TOKENS = 1200

_CODE_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)


@dataclass(frozen=True)
class PitchParseResult:
    ok: bool
    pitches: List[Pitch] = field(default_factory=list)


def parse_pitches(content: Optional[str]) -> PitchParseResult:
    """Parse generator output defensively; never raises."""
    if not content:
        return PitchParseResult(ok=False)
    cleaned = _CODE_FENCE.sub("", content).strip()
    try:
        parsed = json.loads(cleaned)
    except ValueError:
        logger.warning("Pitch output is not valid JSON: %.200s", cleaned)
        return PitchParseResult(ok=False)

    entries = parsed.get("businesses") if isinstance(parsed, dict) else None
    if not isinstance(entries, list):
        logger.warning("Pitch output has no businesses list")
        return PitchParseResult(ok=False)

    pitches: List[Pitch] = []
    for entry in entries:
        if not isinstance(entry, dict) or not isinstance(entry.get("placeId"), str):
            continue
        pitches.append(
            Pitch(
                place_id=entry["placeId"],
                vibe_summary=str(entry.get("vibeSummary") or ""),
                angle=str(entry.get("angle") or ""),
                personalized_message=str(entry.get("personalizedMessage") or ""),
            )
        )
    return PitchParseResult(ok=True, pitches=pitches)


def match_pitches(businesses: Sequence[EnrichedBusiness], pitches: Sequence[Pitch]) -> Dict[str, Pitch]:
    """Key pitches by place id, dropping ids that match no business."""
    known = {business.place_id for business in businesses}
    matched: Dict[str, Pitch] = {}
    for pitch in pitches:
        if pitch.place_id in known and pitch.place_id not in matched:
            matched[pitch.place_id] = pitch
    return matched


class DisabledPitchGenerator:
    """Stand-in used when no LLM credential is configured."""

    enabled = False

    def generate(
        self,
        businesses: Sequence[EnrichedBusiness],
        *,
        query: str,
        vibe: Optional[str] = None,
        tone: Optional[str] = None,
    ) -> Dict[str, Pitch]:
        return {}


class GroqPitchGenerator:
    enabled = True

    def __init__(
        self,
        api_key: str,
        *,
        model: str,
        api_url: str,
        language: str = "French",
        timeout: float = 30,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._api_url = api_url
        self._language = language
        self._timeout = timeout

    def build_messages(
        self,
        businesses: Sequence[EnrichedBusiness],
        *,
        query: str,
        vibe: Optional[str] = None,
        tone: Optional[str] = None,
    ) -> List[Dict[str, str]]:
        payload = [to_pitch_prompt_item(business.details) for business in businesses]
        lines = [
            "You receive a list of businesses that have no website and that we want to approach "
            "to offer building one for them.",
            f'They were found by searching for "{query}".',
            "Analyse each business profile, summarise its perceived vibe, identify a highly relevant "
            f"outreach angle and write a warm, personalised message (max 120 words) in {self._language}.",
            f'Take into account the desired style or vibe: "{vibe}".' if vibe else None,
            f'Use a "{tone}" tone.' if tone else DEFAULT_TONE,
            f"Business data (JSON): {json.dumps(payload, ensure_ascii=False)}",
            f"Answer STRICTLY in the following JSON format: {RESPONSE_FORMAT}.",
            "Never return any text outside the JSON.",
        ]
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": "\n".join(line for line in lines if line)},
        ]

    def generate(
        self,
        businesses: Sequence[EnrichedBusiness],
        *,
        query: str,
        vibe: Optional[str] = None,
        tone: Optional[str] = None,
    ) -> Dict[str, Pitch]:
        if not businesses:
            return {}
        messages = self.build_messages(businesses, query=query, vibe=vibe, tone=tone)
        try:
            content = groq.chat_completion(
                messages,
                api_key=self._api_key,
                api_url=self._api_url,
                model=self._model,
                temperature=TEMPERATURE,
                max_tokens=MAX_TOKENS,
                timeout=self._timeout,
            )
        except groq.PitchGenerationError as exc:
            logger.warning("Pitch generation failed; continuing without pitches: %s", exc)
            return {}

        result = parse_pitches(content)
        if not result.ok:
            return {}
        matched = match_pitches(businesses, result.pitches)
        logger.info("Generated %d pitches for %d businesses", len(matched), len(businesses))
        return matched


def build_pitch_generator(settings: Settings) -> Union[DisabledPitchGenerator, GroqPitchGenerator]:
    if not settings.groq_api_key:
        return DisabledPitchGenerator()
    return GroqPitchGenerator(
        settings.groq_api_key,
        model=settings.groq_model,
        api_url=settings.groq_api_url,
        language=settings.pitch_language,
        timeout=settings.pitch_request_timeout,
    )
