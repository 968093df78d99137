"""Tests for the backend client (no network)."""

import pytest

from conftest import FakeResponse, FakeSession
from firstfix.api import FirstFixClient
from firstfix.errors import BackendReportedError, TransportError
from firstfix.models import IssueTarget

SEARCH_ITEMS = [
    {
        "repo": {"nameWithOwner": "octocat/hello", "url": "https://github.com/octocat/hello", "topics": ["web"]},
        "issue": {"id": "I_7", "number": 7, "title": "First"},
    },
    {
        "repo": {"nameWithOwner": "pallets/flask", "url": "https://github.com/pallets/flask"},
        "issue": {"id": "I_9", "number": 9, "title": "Second"},
    },
]


def _client(routes):
    session = FakeSession(routes)
    return FirstFixClient(base_url="http://backend.test/", session=session), session


class TestSearch:
    def test_items_in_backend_order(self):
        client, session = _client({"/api/search": FakeResponse(200, {"items": SEARCH_ITEMS})})
        cards = client.search_issues("python, flask")
        assert [c.issue.title for c in cards] == ["First", "Second"]
        url, params = session.calls[0]
        assert url == "http://backend.test/api/search"
        assert params == {"skills": "python, flask"}

    def test_missing_items_is_empty(self):
        client, _ = _client({"/api/search": FakeResponse(200, {})})
        assert client.search_issues("rust") == []

    def test_non_2xx_is_transport_error(self):
        client, _ = _client({"/api/search": FakeResponse(503, {"items": []})})
        with pytest.raises(TransportError) as exc:
            client.search_issues("rust")
        assert str(exc.value) == "Search failed: 503"
        assert exc.value.status == 503

    def test_connection_failure_is_transport_error(self, connection_error):
        client, _ = _client({"/api/search": connection_error})
        with pytest.raises(TransportError) as exc:
            client.search_issues("rust")
        assert str(exc.value).startswith("Search failed: ")

    def test_invalid_json(self):
        client, _ = _client({"/api/search": FakeResponse(200, text="<html>")})
        with pytest.raises(TransportError):
            client.search_issues("rust")


class TestStarterKit:
    @pytest.mark.parametrize("body", [None, [], ["owner", "repo"], "ok"])
    def test_non_object_body_is_transport_error(self, body):
        client, _ = _client({"/api/starter_kit": FakeResponse(200, body)})
        with pytest.raises(TransportError) as exc:
            client.fetch_starter_kit(IssueTarget("o", "r", 1))
        assert str(exc.value) == "Starter kit failed: invalid JSON response"

    def test_params(self):
        client, session = _client({"/api/starter_kit": FakeResponse(200, {"owner": "o", "repo": "r"})})
        assert client.get_starter_kit("o", "r", 42) == {"owner": "o", "repo": "r"}
        assert session.calls[0][1] == {"owner": "o", "repo": "r", "number": "42"}

    def test_non_2xx_is_transport_error(self):
        client, _ = _client({"/api/starter_kit": FakeResponse(500, {"error": "boom"})})
        with pytest.raises(TransportError) as exc:
            client.get_starter_kit("o", "r", 1)
        assert str(exc.value) == "Starter kit failed: 500"

    def test_error_body_is_backend_error(self):
        client, _ = _client({"/api/starter_kit": FakeResponse(200, {"error": "Repository is archived"})})
        with pytest.raises(BackendReportedError) as exc:
            client.fetch_starter_kit(IssueTarget("o", "r", 1))
        assert str(exc.value) == "Repository is archived"

    def test_fetch_assembles(self):
        client, _ = _client({"/api/starter_kit": FakeResponse(200, {"hints_fallback": True})})
        kit = client.fetch_starter_kit(IssueTarget("o", "r", 3))
        assert (kit.owner, kit.repo, kit.issue.number) == ("o", "r", 3)
        assert kit.hints_fallback is True
