import httpx
import pytest

from app.core.config import settings
from app.utils import enrichment_utils


def _mock_transport(monkeypatch, handler):
    requests = []

    def recording_handler(request):
        requests.append(request)
        return handler(request)

    monkeypatch.setattr(
        enrichment_utils,
        "_client",
        lambda: httpx.AsyncClient(transport=httpx.MockTransport(recording_handler)),
    )
    return requests


@pytest.fixture
def europeana_key(monkeypatch):
    monkeypatch.setattr(settings, "EUROPEANA_API_KEY", "test-key")


def test_europeana_without_key_returns_empty_items(client, monkeypatch):
    monkeypatch.setattr(settings, "EUROPEANA_API_KEY", None)
    requests = _mock_transport(monkeypatch, lambda request: httpx.Response(500))

    response = client.get("/api/enrichment/europeana", params={"q": "herati"})

    assert response.status_code == 200
    assert response.json() == {"items": []}
    assert requests == []


def test_europeana_requires_query(client, europeana_key):
    response = client.get("/api/enrichment/europeana")
    assert response.status_code == 400
    assert response.json() == {"error": "Missing query parameter 'q'"}


def test_europeana_proxies_response_verbatim(client, monkeypatch, europeana_key):
    payload = {"success": True, "totalResults": 1, "items": [{"id": "/123/abc"}]}
    requests = _mock_transport(monkeypatch, lambda request: httpx.Response(200, json=payload))

    response = client.get("/api/enrichment/europeana", params={"q": "persian carpet"})

    assert response.json() == payload
    params = requests[0].url.params
    assert params["query"] == "persian carpet"
    assert params["wskey"] == "test-key"
    assert params["rows"] == "5"
    assert params["reusability"] == "open"
    assert params["profile"] == "rich"
    assert params["media"] == "true"


def test_europeana_errors_degrade_to_empty_items(client, monkeypatch, europeana_key):
    def unreachable(request):
        raise httpx.ConnectError("connection refused", request=request)

    _mock_transport(monkeypatch, unreachable)
    response = client.get("/api/enrichment/europeana", params={"q": "ikat"})
    assert response.status_code == 200
    assert response.json() == {"items": []}


def test_europeana_invalid_json_degrades_to_empty_items(client, monkeypatch, europeana_key):
    _mock_transport(monkeypatch, lambda request: httpx.Response(200, text="<html>"))
    response = client.get("/api/enrichment/europeana", params={"q": "ikat"})
    assert response.json() == {"items": []}


def test_met_museum_fetches_limited_objects(client, monkeypatch):
    monkeypatch.setattr(settings, "ENRICHMENT_MAX_RESULTS", 2)

    def handler(request):
        if request.url.path.endswith("/search"):
            return httpx.Response(200, json={"total": 3, "objectIDs": [11, 22, 33]})
        object_id = int(request.url.path.rsplit("/", 1)[-1])
        return httpx.Response(200, json={"objectID": object_id, "title": f"Carpet {object_id}"})

    requests = _mock_transport(monkeypatch, handler)
    response = client.get("/api/enrichment/met", params={"q": "carpet", "medium": "Textiles"})

    assert response.json() == {
        "items": [
            {"objectID": 11, "title": "Carpet 11"},
            {"objectID": 22, "title": "Carpet 22"},
        ]
    }
    search_params = requests[0].url.params
    assert search_params["hasImages"] == "true"
    assert search_params["medium"] == "Textiles"
    assert len(requests) == 3


def test_met_museum_skips_failed_objects(client, monkeypatch):
    def handler(request):
        if request.url.path.endswith("/search"):
            return httpx.Response(200, json={"objectIDs": [1, 2]})
        if request.url.path.endswith("/1"):
            return httpx.Response(404)
        return httpx.Response(200, json={"objectID": 2})

    _mock_transport(monkeypatch, handler)
    response = client.get("/api/enrichment/met", params={"q": "kilim"})
    assert response.json() == {"items": [{"objectID": 2}]}


def test_met_museum_without_matches_returns_empty_items(client, monkeypatch):
    _mock_transport(monkeypatch, lambda request: httpx.Response(200, json={"total": 0, "objectIDs": None}))
    response = client.get("/api/enrichment/met", params={"q": "nothing"})
    assert response.json() == {"items": []}


def test_met_museum_search_failure_degrades(client, monkeypatch):
    _mock_transport(monkeypatch, lambda request: httpx.Response(503))
    response = client.get("/api/enrichment/met", params={"q": "tartan"})
    assert response.status_code == 200
    assert response.json() == {"items": []}


def test_met_museum_requires_query(client):
    assert client.get("/api/enrichment/met").status_code == 400


def test_degraded_responses_do_not_share_state():
    first = enrichment_utils.empty_result()
    first["items"].append({"id": "leaked"})
    assert enrichment_utils.empty_result() == {"items": []}
