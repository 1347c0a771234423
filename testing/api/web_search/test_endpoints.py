"""Tests for the web search proxy endpoint."""

import unittest
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient

from src.api.app import app
from src.search import SearchClientError, SearchResult
from src.utils.config import AppSettings, get_settings


class TestWebSearchEndpoint(unittest.TestCase):
    """Tests for POST /api/web-search endpoint."""

    def setUp(self) -> None:
        """Set up test client with a search key configured."""
        self.app = app
        self.settings = AppSettings(brave_api_key="brave-test", _env_file=None)
        self.app.dependency_overrides[get_settings] = lambda: self.settings
        self.client = TestClient(self.app)

    def tearDown(self) -> None:
        """Remove dependency overrides."""
        self.app.dependency_overrides.clear()

    @patch("src.api.web_search.endpoints.BraveSearchClient")
    def test_search_success(self, mock_client_class: MagicMock) -> None:
        """Test that results are returned in order."""
        mock_client_class.return_value.search.return_value = [
            SearchResult(title="First", url="https://1.example", snippet="One"),
            SearchResult(title="Second", url="https://2.example", snippet=""),
        ]

        response = self.client.post("/api/web-search", json={"query": "ai news", "limit": 2})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {
                "results": [
                    {"title": "First", "url": "https://1.example", "snippet": "One"},
                    {"title": "Second", "url": "https://2.example", "snippet": ""},
                ]
            },
        )
        mock_client_class.assert_called_once_with(api_key="brave-test", timeout=10.0)
        mock_client_class.return_value.search.assert_called_once_with("ai news", count=2)

    @patch("src.api.web_search.endpoints.BraveSearchClient")
    def test_limit_is_clamped(self, mock_client_class: MagicMock) -> None:
        """Test that the result count never exceeds 10."""
        mock_client_class.return_value.search.return_value = []

        self.client.post("/api/web-search", json={"query": "ai", "limit": 50})

        mock_client_class.return_value.search.assert_called_once_with("ai", count=10)

    @patch("src.api.web_search.endpoints.BraveSearchClient")
    def test_missing_limit_uses_default(self, mock_client_class: MagicMock) -> None:
        """Test the default result count."""
        mock_client_class.return_value.search.return_value = []

        response = self.client.post("/api/web-search", json={"query": "ai"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"results": []})
        mock_client_class.return_value.search.assert_called_once_with("ai", count=5)

    @patch("src.api.web_search.endpoints.BraveSearchClient")
    def test_overflowing_limit_uses_default(self, mock_client_class: MagicMock) -> None:
        """Test that a limit too large for a float falls back to the default."""
        mock_client_class.return_value.search.return_value = []

        response = self.client.post(
            "/api/web-search",
            content=b'{"query": "ai", "limit": 1e400}',
            headers={"Content-Type": "application/json"},
        )

        self.assertEqual(response.status_code, 200)
        mock_client_class.return_value.search.assert_called_once_with("ai", count=5)

    def test_missing_query_returns_400(self) -> None:
        """Test that a query is required."""
        response = self.client.post("/api/web-search", json={"limit": 3})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Missing query"})

    def test_missing_key_returns_500(self) -> None:
        """Test that a missing search key is reported by name."""
        self.settings = AppSettings(brave_api_key=None, _env_file=None)

        response = self.client.post("/api/web-search", json={"query": "ai"})

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "BRAVE_API_KEY not set"})

    @patch("src.api.web_search.endpoints.BraveSearchClient")
    def test_upstream_error_returns_502(self, mock_client_class: MagicMock) -> None:
        """Test that upstream failures are passed through."""
        mock_client_class.return_value.search.side_effect = SearchClientError("Invalid token")

        response = self.client.post("/api/web-search", json={"query": "ai"})

        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json(), {"error": "Invalid token"})


if __name__ == "__main__":
    unittest.main()
