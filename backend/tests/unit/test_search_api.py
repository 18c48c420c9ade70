import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient

from backend.src.api.main import app
from backend.src.api.routes.search import get_search_planner
from backend.src.models.search import CountResult, ResultEnvelope, SearchRequest
from backend.src.services.search_planner import SearchPlanner

client = TestClient(app)


@pytest.fixture
def mock_planner():
    planner = MagicMock(spec=SearchPlanner)
    app.dependency_overrides[get_search_planner] = lambda: planner
    yield planner
    app.dependency_overrides = {}


def test_search_returns_entries(mock_planner):
    mock_planner.search.return_value = ResultEnvelope.success([{"_id": "1", "dictionaryId": "d1"}])

    response = client.get(
        "/search/entry/d1",
        params={"text": "cat", "matchPartial": "1", "lang": "en", "pageNumber": "2", "pageLimit": "10"},
    )

    assert response.status_code == 200
    assert response.json() == [{"_id": "1", "dictionaryId": "d1"}]
    request = mock_planner.search.call_args[0][0]
    assert isinstance(request, SearchRequest)
    assert request.dictionary_id == "d1"
    assert request.match_partial is True
    assert request.lang == "en"
    assert (request.page_number, request.page_limit) == (2, 10)


def test_search_accepts_long_text(mock_planner):
    mock_planner.search.return_value = ResultEnvelope.not_found()
    long_text = "a" * 300

    response = client.get("/search/entry/d1", params={"text": long_text})

    assert response.status_code == 404
    mock_planner.search.assert_called_once()
    assert mock_planner.search.call_args[0][0].text == long_text


def test_search_count_only(mock_planner):
    mock_planner.search.return_value = ResultEnvelope.success(CountResult(count=0))

    response = client.get("/search/entry/d1", params={"text": "cat", "countTotalOnly": "1"})

    assert response.status_code == 200
    assert response.json() == {"count": 0}


def test_search_not_found(mock_planner):
    mock_planner.search.return_value = ResultEnvelope.not_found()

    response = client.get("/search/entry/d1", params={"text": "zzz"})

    assert response.status_code == 404
    assert response.json() == [{}]


def test_search_failure(mock_planner):
    mock_planner.search.return_value = ResultEnvelope.failure(
        ConnectionError("store unreachable")
    )

    response = client.get("/search/entry/d1", params={"text": "cat"})

    assert response.status_code == 500
    assert response.json() == {
        "errorType": "ConnectionError",
        "errorMessage": "store unreachable",
    }


def test_search_requires_text(mock_planner):
    response = client.get("/search/entry/d1")

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "validation_error"
    assert body["message"] == "Search text must be specified."
    mock_planner.search.assert_not_called()


def test_health():
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
