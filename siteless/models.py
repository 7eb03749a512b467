"""Core data models shared by the search pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(frozen=True, slots=True)
class Coordinates:
    lat: float
    lng: float

    def as_dict(self) -> Dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}


@dataclass(slots=True)
class PlaceSummary:
    """Minimal listing returned by the Places text search."""

    place_id: str
    name: Optional[str] = None
    formatted_address: Optional[str] = None
    rating: Optional[float] = None
    user_ratings_total: Optional[int] = None
    business_status: Optional[str] = None
    types: List[str] = field(default_factory=list)


@dataclass(slots=True)
class Review:
    author_name: Optional[str] = None
    text: Optional[str] = None
    rating: Optional[float] = None


@dataclass(slots=True)
class PlaceDetails:
    """Full Places details record; `website` drives the filter."""

    place_id: str
    name: Optional[str] = None
    formatted_address: Optional[str] = None
    formatted_phone_number: Optional[str] = None
    website: Optional[str] = None
    rating: Optional[float] = None
    user_ratings_total: Optional[int] = None
    business_status: Optional[str] = None
    types: List[str] = field(default_factory=list)
    weekday_text: Optional[List[str]] = None
    editorial_overview: Optional[str] = None
    reviews: List[Review] = field(default_factory=list)

    @property
    def has_website(self) -> bool:
        return bool(self.website and self.website.strip())


@dataclass(frozen=True, slots=True)
class Pitch:
    """Generated outreach copy tied to one business by place id."""

    place_id: str
    vibe_summary: str = ""
    angle: str = ""
    personalized_message: str = ""


@dataclass(slots=True)
class EnrichedBusiness:
    details: PlaceDetails
    google_maps_url: str
    pitch: Optional[Pitch] = None

    @property
    def place_id(self) -> str:
        return self.details.place_id


@dataclass(slots=True)
class SearchMetadata:
    total_found: int
    total_without_website: int
    location: Coordinates
    query: str
    executed_at: str
    note: Optional[str] = None
    pitches_generated: Optional[int] = None


@dataclass(slots=True)
class SearchResponse:
    businesses: List[EnrichedBusiness]
    metadata: SearchMetadata
