"""Request schema and validation for the search endpoint."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

DEFAULT_RADIUS = 5000
DEFAULT_MAX_RESULTS = 5

_OPTIONAL_FIELDS = ("radius", "maxResults", "vibe", "tone")

_MESSAGES = {
    ("query", "string_too_short"): "Query must be at least 2 characters.",
    ("location", "string_too_short"): "Enter a valid geographic area.",
    ("radius", "greater_than_equal"): "Radius must be at least 500 meters.",
    ("radius", "less_than_equal"): "Radius must be at most 50 km.",
    ("maxResults", "greater_than_equal"): "Request at least 1 result.",
    ("maxResults", "less_than_equal"): "Request at most 8 results.",
    ("vibe", "string_too_long"): "Vibe must be at most 280 characters.",
    ("tone", "string_too_long"): "Tone must be at most 120 characters.",
}
_GENERIC_MESSAGES = {
    "missing": "This field is required.",
    "string_type": "Must be a string.",
    "int_type": "Must be an integer.",
    "int_from_float": "Must be an integer.",
    "int_parsing": "Must be an integer.",
}


class RequestValidationError(ValueError):
    """Raised with every violated field when a search payload is invalid."""

    def __init__(self, details: Dict[str, List[str]], message: str = "Invalid input.") -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class SearchRequest(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True, extra="ignore")

    query: str = Field(min_length=2)
    location: str = Field(min_length=2)
    radius: int = Field(default=DEFAULT_RADIUS, ge=500, le=50000)
    maxResults: int = Field(default=DEFAULT_MAX_RESULTS, ge=1, le=8)
    vibe: Optional[str] = Field(default=None, max_length=280)
    tone: Optional[str] = Field(default=None, max_length=120)

    @field_validator("radius", "maxResults", mode="before")
    @classmethod
    def _json_number_only(cls, value: Any) -> Any:
        # Whole-valued floats pass; bools and numeric strings do not.
        if isinstance(value, (bool, str)):
            raise PydanticCustomError("int_type", "Input should be a valid integer")
        return value


def _field_errors(exc: ValidationError) -> Dict[str, List[str]]:
    details: Dict[str, List[str]] = {}
    for error in exc.errors():
        loc = error.get("loc") or ("body",)
        field_name = str(loc[0])
        error_type = error.get("type", "")
        message = _MESSAGES.get((field_name, error_type)) or _GENERIC_MESSAGES.get(error_type) or error.get("msg", "Invalid value.")
        details.setdefault(field_name, []).append(message)
    return details


def parse_search_request(payload: Any) -> SearchRequest:
    """Validate a decoded JSON body into a SearchRequest.

    All violations are reported together in `RequestValidationError.details`
    so the client can fix the whole form in one round-trip. Absent, null or
    blank optional fields fall back to their defaults.
    """
    if not isinstance(payload, dict):
        raise RequestValidationError({"body": ["Request body must be a JSON object."]}, message="Invalid request.")

    cleaned = dict(payload)
    for name in _OPTIONAL_FIELDS:
        value = cleaned.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            cleaned.pop(name, None)

    try:
        return SearchRequest.model_validate(cleaned)
    except ValidationError as exc:
        raise RequestValidationError(_field_errors(exc)) from exc
