"""Tests for the article generation endpoint."""

import unittest
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient

from src.api.app import app
from src.generation.exceptions import GenerationClientError
from src.search import SearchClientError, SearchResult
from src.utils.config import AppSettings, get_settings

GENERATED_ARTICLE = "# **AI i vården**\n\nFörsta stycket om AI.\n\nAndra stycket."


class NewsGenerateTestCase(unittest.TestCase):
    """Shared setup for article generation tests."""

    def setUp(self) -> None:
        """Set up test client with Gemini and OpenAI keys configured."""
        self.app = app
        self.settings = AppSettings(
            gemini_api_key="gemini-test",
            openai_api_key="sk-test",
            brave_api_key=None,
            _env_file=None,
        )
        self.app.dependency_overrides[get_settings] = lambda: self.settings
        self.client = TestClient(self.app)

    def tearDown(self) -> None:
        """Remove dependency overrides."""
        self.app.dependency_overrides.clear()


class TestNewsGenerateGemini(NewsGenerateTestCase):
    """Tests for the Gemini path of POST /api/news-generate."""

    @patch("src.api.news_generate.endpoints.GeminiClient")
    def test_default_provider_is_gemini(self, mock_client_class: MagicMock) -> None:
        """Test that omitting the provider generates with Gemini."""
        mock_client_class.return_value.generate_content.return_value = GENERATED_ARTICLE

        response = self.client.post("/api/news-generate", json={"topic": "AI i vården"})

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["title"], "AI i vården")
        self.assertEqual(data["content"], "Första stycket om AI.\n\nAndra stycket.")
        self.assertEqual(data["sources"], [])
        self.assertEqual(data["metadata"]["sourceCount"], 0)
        self.assertEqual(data["metadata"]["wordCount"], 6)
        self.assertIn("generatedAt", data["metadata"])
        mock_client_class.assert_called_once_with(
            api_key="gemini-test",
            model="gemini-2.5-flash",
            timeout=25.0,
        )
        prompt = mock_client_class.return_value.generate_content.call_args.args[0]
        self.assertIn('"AI i vården"', prompt)

    @patch("src.api.news_generate.endpoints.GeminiClient")
    def test_unknown_provider_uses_gemini(self, mock_client_class: MagicMock) -> None:
        """Test that any provider other than openai routes to Gemini."""
        mock_client_class.return_value.generate_content.return_value = GENERATED_ARTICLE

        response = self.client.post(
            "/api/news-generate",
            json={"topic": "AI i vården", "provider": "claude"},
        )

        self.assertEqual(response.status_code, 200)
        mock_client_class.return_value.generate_content.assert_called_once()

    @patch("src.api.news_generate.endpoints.GeminiClient")
    def test_topic_is_sanitised_before_prompting(self, mock_client_class: MagicMock) -> None:
        """Test that markup is stripped from the topic."""
        mock_client_class.return_value.generate_content.return_value = GENERATED_ARTICLE

        response = self.client.post(
            "/api/news-generate",
            json={"topic": "<script>alert(1)</script>Val 2026"},
        )

        self.assertEqual(response.status_code, 200)
        prompt = mock_client_class.return_value.generate_content.call_args.args[0]
        self.assertIn('"alert(1)Val 2026"', prompt)
        self.assertNotIn("<script>", prompt)

    def test_missing_gemini_key_returns_500(self) -> None:
        """Test that a missing Gemini key is reported by name."""
        self.settings = AppSettings(gemini_api_key=None, _env_file=None)

        response = self.client.post("/api/news-generate", json={"topic": "AI"})

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "GEMINI_API_KEY not set"})

    @patch("src.api.news_generate.endpoints.GeminiClient")
    def test_provider_error_returns_502(self, mock_client_class: MagicMock) -> None:
        """Test that Gemini errors are passed through as bad gateway."""
        mock_client_class.return_value.generate_content.side_effect = GenerationClientError(
            "API key not valid"
        )

        response = self.client.post("/api/news-generate", json={"topic": "AI"})

        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json(), {"error": "API key not valid"})

    @patch("src.api.news_generate.endpoints.GeminiClient")
    def test_unexpected_error_returns_500(self, mock_client_class: MagicMock) -> None:
        """Test that unexpected failures are hidden behind a generic message."""
        mock_client_class.return_value.generate_content.side_effect = RuntimeError("boom")

        response = self.client.post("/api/news-generate", json={"topic": "AI"})

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "Generation failed"})

    @patch("src.api.news_generate.endpoints.BraveSearchClient")
    @patch("src.api.news_generate.endpoints.GeminiClient")
    def test_search_sources_are_cited(
        self,
        mock_client_class: MagicMock,
        mock_search_class: MagicMock,
    ) -> None:
        """Test that search results are prompted, returned and cited."""
        self.settings = AppSettings(
            gemini_api_key="gemini-test",
            brave_api_key="brave-test",
            _env_file=None,
        )
        mock_search_class.return_value.search.return_value = [
            SearchResult(title="Källa A", url="https://a.example", snippet="Utdrag A"),
            SearchResult(title="", url="https://b.example", snippet=""),
        ]
        mock_client_class.return_value.generate_content.return_value = GENERATED_ARTICLE

        response = self.client.post("/api/news-generate", json={"topic": "AI i vården"})

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(
            data["sources"],
            [
                {"title": "Källa A", "url": "https://a.example"},
                {"title": "https://b.example", "url": "https://b.example"},
            ],
        )
        self.assertEqual(data["metadata"]["sourceCount"], 2)
        self.assertTrue(data["content"].endswith("2. https://b.example (https://b.example)"))
        self.assertIn("\n\nKällor:\n1. Källa A (https://a.example)", data["content"])
        self.assertEqual(data["metadata"]["wordCount"], 6)
        prompt = mock_client_class.return_value.generate_content.call_args.args[0]
        self.assertIn("Utdrag A", prompt)
        mock_search_class.return_value.search.assert_called_once_with("AI i vården", count=5)

    @patch("src.api.news_generate.endpoints.BraveSearchClient")
    @patch("src.api.news_generate.endpoints.GeminiClient")
    def test_search_failure_only_drops_sources(
        self,
        mock_client_class: MagicMock,
        mock_search_class: MagicMock,
    ) -> None:
        """Test that a failed search still produces an article."""
        self.settings = AppSettings(
            gemini_api_key="gemini-test",
            brave_api_key="brave-test",
            _env_file=None,
        )
        mock_search_class.return_value.search.side_effect = SearchClientError("quota")
        mock_client_class.return_value.generate_content.return_value = GENERATED_ARTICLE

        response = self.client.post("/api/news-generate", json={"topic": "AI i vården"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["sources"], [])
        self.assertNotIn("Källor:", response.json()["content"])


class TestNewsGenerateOpenAI(NewsGenerateTestCase):
    """Tests for the OpenAI path of POST /api/news-generate."""

    @patch("src.api.news_generate.endpoints.OpenAIResponsesClient")
    def test_openai_article_with_sources(self, mock_client_class: MagicMock) -> None:
        """Test text and de-duplicated sources from a Responses payload."""
        mock_client_class.return_value.create.return_value = {
            "output_text": "Rubrik om AI\nBrödtext här.",
            "output": [
                {
                    "type": "web_search_call",
                    "action": {
                        "sources": [
                            {"title": "A", "url": "https://a.example"},
                            {"url": "https://a.example"},
                            {"url": "https://c.example"},
                        ]
                    },
                }
            ],
        }

        response = self.client.post(
            "/api/news-generate",
            json={"topic": "AI", "provider": "OPENAI"},
        )

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["title"], "Rubrik om AI")
        self.assertEqual(data["content"], "Brödtext här.")
        self.assertEqual(
            data["sources"],
            [
                {"title": "A", "url": "https://a.example"},
                {"title": "https://c.example", "url": "https://c.example"},
            ],
        )
        self.assertEqual(data["metadata"]["sourceCount"], 2)
        create_call = mock_client_class.return_value.create.call_args
        self.assertEqual(create_call.args[0], "AI")
        self.assertEqual(create_call.kwargs["prompt_version"], "2")
        self.assertIn("web_search_call.action.sources", create_call.kwargs["include"])

    @patch("src.api.news_generate.endpoints.OpenAIResponsesClient")
    def test_openai_without_text_returns_502(self, mock_client_class: MagicMock) -> None:
        """Test that an empty response is a bad gateway."""
        mock_client_class.return_value.create.return_value = {"output": []}

        response = self.client.post(
            "/api/news-generate",
            json={"topic": "AI", "provider": "openai"},
        )

        self.assertEqual(response.status_code, 502)

    def test_openai_without_key_returns_500(self) -> None:
        """Test that a missing OpenAI key is reported by name."""
        self.settings = AppSettings(
            gemini_api_key="gemini-test",
            openai_api_key=None,
            _env_file=None,
        )

        response = self.client.post(
            "/api/news-generate",
            json={"topic": "AI", "provider": "openai"},
        )

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "OPENAI_API_KEY not set"})


class TestNewsGenerateTopicValidation(NewsGenerateTestCase):
    """Tests for topic validation in POST /api/news-generate."""

    def test_missing_topic_returns_400(self) -> None:
        """Test that a topic is required."""
        response = self.client.post("/api/news-generate", json={})

        self.assertEqual(response.status_code, 400)
        self.assertIn("error", response.json())

    def test_blank_topic_returns_400(self) -> None:
        """Test that a whitespace-only topic is rejected."""
        response = self.client.post("/api/news-generate", json={"topic": "   "})

        self.assertEqual(response.status_code, 400)

    def test_non_string_topic_returns_400(self) -> None:
        """Test that a non-string topic is rejected."""
        response = self.client.post("/api/news-generate", json={"topic": 42})

        self.assertEqual(response.status_code, 400)

    def test_overlong_topic_returns_400(self) -> None:
        """Test that topics over 200 characters are rejected."""
        response = self.client.post("/api/news-generate", json={"topic": "a" * 201})

        self.assertEqual(response.status_code, 400)
        self.assertIn("200", response.json()["error"])

    def test_markup_only_topic_returns_400(self) -> None:
        """Test that a topic with nothing left after sanitising is rejected."""
        response = self.client.post("/api/news-generate", json={"topic": "<b></b>"})

        self.assertEqual(response.status_code, 400)


if __name__ == "__main__":
    unittest.main()
