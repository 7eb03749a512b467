import threading

import pytest

from siteless.core import enricher
from siteless.vendors.google_places import GoogleMapsError


def _details(place_id, website=None):
    payload = {"place_id": place_id, "name": f"Company {place_id}"}
    if website is not None:
        payload["website"] = website
    return payload


@pytest.fixture
def fake_details(monkeypatch):
    calls = []
    lock = threading.Lock()
    catalog = {}

    def fake_place_details(place_id, api_key, timeout=10):
        with lock:
            calls.append(place_id)
        value = catalog.get(place_id)
        if isinstance(value, Exception):
            raise value
        return value if value is not None else {}

    monkeypatch.setattr(enricher.google_places, "place_details", fake_place_details)
    return calls, catalog


def test_overfetch_caps_detail_lookups(fake_details):
    calls, catalog = fake_details
    ids = [str(i) for i in range(10)]
    catalog.update({pid: _details(pid) for pid in ids})

    businesses = enricher.enrich_candidates(ids, "key", max_results=3)

    assert sorted(calls) == ["0", "1", "2", "3", "4", "5"]
    assert [business.place_id for business in businesses] == ["0", "1", "2"]


def test_filters_websites_and_truncates(fake_details):
    calls, catalog = fake_details
    catalog.update(
        {
            "a": _details("a", website="https://a.fr"),
            "b": _details("b"),
            "c": _details("c", website=""),
            "d": _details("d"),
        }
    )

    businesses = enricher.enrich_candidates(["a", "b", "c", "d"], "key", max_results=2)

    assert [business.place_id for business in businesses] == ["b", "c"]
    assert all(not business.details.has_website for business in businesses)
    assert businesses[0].google_maps_url == "https://www.google.com/maps/place/?q=place_id:b"
    assert businesses[0].pitch is None


def test_failed_detail_fetch_is_isolated(fake_details):
    calls, catalog = fake_details
    catalog.update(
        {
            "a": GoogleMapsError("NOT_FOUND"),
            "b": _details("b"),
            "c": RuntimeError("boom"),
            "e": _details("e"),
        }
    )

    businesses = enricher.enrich_candidates(["a", "b", "c", "d", "e"], "key", max_results=5)

    assert sorted(calls) == ["a", "b", "c", "d", "e"]
    assert [business.place_id for business in businesses] == ["b", "e"]


def test_all_candidates_with_websites(fake_details):
    _, catalog = fake_details
    catalog.update({"a": _details("a", website="https://a.fr"), "b": _details("b", website="https://b.fr")})

    assert enricher.enrich_candidates(["a", "b"], "key", max_results=5) == []


def test_detail_fetches_run_concurrently(monkeypatch):
    barrier = threading.Barrier(3, timeout=5)

    def fake_place_details(place_id, api_key, timeout=10):
        barrier.wait()
        return _details(place_id)

    monkeypatch.setattr(enricher.google_places, "place_details", fake_place_details)

    details = enricher.fetch_details(["a", "b", "c"], "key", max_workers=3)

    assert [item.place_id for item in details] == ["a", "b", "c"]


def test_fetch_details_empty():
    assert enricher.fetch_details([], "key") == []
