import pytest

from siteless.schemas import RequestValidationError, SearchRequest, parse_search_request


def test_defaults_applied():
    request = parse_search_request({"query": "restaurant", "location": "Paris, France"})

    assert request.radius == 5000
    assert request.maxResults == 5
    assert request.vibe is None
    assert request.tone is None


def test_null_and_blank_optionals_fall_back_to_defaults():
    request = parse_search_request(
        {"query": "restaurant", "location": "Paris", "radius": None, "maxResults": None, "vibe": "  ", "tone": ""}
    )
    assert request.radius == 5000
    assert request.maxResults == 5
    assert request.vibe is None
    assert request.tone is None


@pytest.mark.parametrize("radius", [500, 5000, 50000])
def test_radius_bounds_accepted(radius):
    assert parse_search_request({"query": "bar", "location": "Lyon", "radius": radius}).radius == radius


@pytest.mark.parametrize("radius", [499, 50001])
def test_radius_bounds_rejected(radius):
    with pytest.raises(RequestValidationError) as excinfo:
        parse_search_request({"query": "bar", "location": "Lyon", "radius": radius})
    assert list(excinfo.value.details) == ["radius"]


@pytest.mark.parametrize("max_results", [0, 9, 2.5, "3", True])
def test_max_results_rejected(max_results):
    with pytest.raises(RequestValidationError) as excinfo:
        parse_search_request({"query": "bar", "location": "Lyon", "maxResults": max_results})
    assert "maxResults" in excinfo.value.details


def test_short_query_reports_query_field():
    with pytest.raises(RequestValidationError) as excinfo:
        parse_search_request({"query": "a", "location": "Paris, France"})

    assert excinfo.value.details == {"query": ["Query must be at least 2 characters."]}


def test_all_violations_reported_together():
    with pytest.raises(RequestValidationError) as excinfo:
        parse_search_request(
            {"query": "a", "radius": 10, "maxResults": 20, "vibe": "v" * 281, "tone": "t" * 121}
        )

    assert set(excinfo.value.details) == {"query", "location", "radius", "maxResults", "vibe", "tone"}
    assert excinfo.value.details["location"] == ["This field is required."]


def test_strings_are_stripped_before_length_checks():
    with pytest.raises(RequestValidationError) as excinfo:
        parse_search_request({"query": " a ", "location": "Paris"})
    assert "query" in excinfo.value.details


def test_non_object_body():
    with pytest.raises(RequestValidationError) as excinfo:
        parse_search_request(["restaurant"])
    assert "body" in excinfo.value.details


def test_request_is_immutable():
    request = parse_search_request({"query": "restaurant", "location": "Paris"})
    with pytest.raises(Exception):
        request.query = "bar"
    assert isinstance(request, SearchRequest)


@pytest.mark.parametrize(
    "radius, max_results, accepted",
    [
        (5000.0, 3.0, True),
        (5000.5, 3, False),
        (5000, 3.5, False),
        (True, 3, False),
        (5000, "3", False),
    ],
)
def test_integral_floats_accepted_for_integer_fields(radius, max_results, accepted):
    body = {"query": "restaurant", "location": "Paris", "radius": radius, "maxResults": max_results}
    if accepted:
        request = parse_search_request(body)
        assert request.radius == 5000 and isinstance(request.radius, int)
        assert request.maxResults == 3 and isinstance(request.maxResults, int)
    else:
        with pytest.raises(RequestValidationError) as excinfo:
            parse_search_request(body)
        assert excinfo.value.details
        assert all(messages == ["Must be an integer."] for messages in excinfo.value.details.values())
