"""Tests for the media search client."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import httpx
import pytest

from matchreel.config import SearchSettings
from matchreel.search.client import SearchClient, SearchError


@pytest.fixture
def mock_httpx_client():
    """Create a mock httpx client."""
    with patch("matchreel.search.client.httpx.Client") as mock_class:
        mock_instance = MagicMock()
        mock_class.return_value = mock_instance
        yield mock_instance


@pytest.fixture
def client(mock_httpx_client):
    return SearchClient(SearchSettings(api_base_url="https://api.example.com/search", request_delay=0))


def _response(status_code: int = 200, payload=None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.reason_phrase = "Service Unavailable" if status_code >= 500 else "OK"
    response.json.return_value = payload
    return response


class TestSearchClient:
    def test_search_returns_parsed_clips(self, client, mock_httpx_client) -> None:
        mock_httpx_client.request.return_value = _response(
            payload={
                "searchResultMediaList": [
                    {
                        "urn": "urn:srf:video:1",
                        "title": "FC A - FC B",
                        "show": {"title": "Sport-Clip"},
                        "date": "2024-03-10T21:30:00+01:00",
                        "duration": 95000,
                    },
                    {"urn": "urn:srf:video:2", "title": None, "description": None},
                ]
            }
        )

        clips = client.search("FC A FC B")

        mock_httpx_client.request.assert_called_once_with(
            "GET", "https://api.example.com/search", params={"q": "FC A FC B"}
        )
        assert [clip.urn for clip in clips] == ["urn:srf:video:1", "urn:srf:video:2"]
        assert clips[0].show_title == "Sport-Clip"
        assert clips[1].title == ""
        assert clips[1].duration == 0

    def test_missing_result_list_is_empty(self, client, mock_httpx_client) -> None:
        mock_httpx_client.request.return_value = _response(payload={})

        assert client.search("FC A") == []

    def test_non_success_status_degrades_to_empty(self, client, mock_httpx_client, caplog) -> None:
        mock_httpx_client.request.return_value = _response(status_code=503)

        with caplog.at_level("ERROR"):
            assert client.search("FC A") == []

        assert "HTTP 503" in caplog.text

    def test_transport_error_degrades_to_empty(self, client, mock_httpx_client) -> None:
        mock_httpx_client.request.side_effect = httpx.ConnectError("connection refused")

        assert client.search("FC A") == []

    def test_invalid_json_degrades_to_empty(self, client, mock_httpx_client) -> None:
        response = _response()
        response.json.side_effect = ValueError("Expecting value")
        mock_httpx_client.request.return_value = response

        assert client.search("FC A") == []

    def test_malformed_payload_degrades_to_empty(self, client, mock_httpx_client) -> None:
        mock_httpx_client.request.return_value = _response(payload={"searchResultMediaList": "oops"})

        assert client.search("FC A") == []

    def test_failed_request_is_not_retried(self, client, mock_httpx_client) -> None:
        mock_httpx_client.request.return_value = _response(status_code=500)

        client.search("FC A")

        assert mock_httpx_client.request.call_count == 1

    def test_fetch_raises_search_error(self, client, mock_httpx_client) -> None:
        mock_httpx_client.request.return_value = _response(status_code=404)

        with pytest.raises(SearchError):
            client._fetch("FC A")


class TestPacing:
    def test_consecutive_requests_are_spaced(self, mock_httpx_client) -> None:
        mock_httpx_client.request.return_value = _response(payload={"searchResultMediaList": []})
        client = SearchClient(SearchSettings(request_delay=0.3))

        with patch("matchreel.search.client.time") as mock_time:
            mock_time.monotonic.side_effect = [100.0, 100.1, 100.1]
            client.search("first")
            client.search("second")

        mock_time.sleep.assert_called_once()
        assert mock_time.sleep.call_args[0][0] == pytest.approx(0.2)

    def test_first_request_is_not_delayed(self, mock_httpx_client) -> None:
        mock_httpx_client.request.return_value = _response(payload={"searchResultMediaList": []})
        client = SearchClient(SearchSettings(request_delay=0.3))

        with patch("matchreel.search.client.time") as mock_time:
            mock_time.monotonic.return_value = 50.0
            client.search("only")

        mock_time.sleep.assert_not_called()


def test_context_manager_closes_client(mock_httpx_client) -> None:
    with SearchClient(SearchSettings(request_delay=0)):
        pass

    mock_httpx_client.close.assert_called_once()
