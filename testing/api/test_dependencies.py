"""Tests for API dependencies module."""

import asyncio
import unittest

from fastapi import HTTPException
from starlette.requests import Request

from src.api.dependencies import check_admin_token, is_admin, json_body, require_admin
from src.utils.config import AppSettings


def _request_with_body(body: bytes) -> Request:
    async def receive() -> dict[str, object]:
        return {"type": "http.request", "body": body, "more_body": False}

    scope = {"type": "http", "method": "POST", "path": "/api/news", "headers": []}
    return Request(scope, receive)


class TestCheckAdminToken(unittest.TestCase):
    """Tests for check_admin_token function."""

    def test_matching_token(self) -> None:
        """Test that equal tokens pass."""
        self.assertTrue(check_admin_token("secret", "secret"))

    def test_mismatched_token(self) -> None:
        """Test that different tokens fail."""
        self.assertFalse(check_admin_token("guess", "secret"))

    def test_missing_provided_token(self) -> None:
        """Test that a missing header fails."""
        self.assertFalse(check_admin_token(None, "secret"))

    def test_unconfigured_token_never_matches(self) -> None:
        """Test that nobody is admin when no token is configured."""
        self.assertFalse(check_admin_token("", None))
        self.assertFalse(check_admin_token("", ""))
        self.assertFalse(check_admin_token("anything", None))


class TestAdminDependencies(unittest.TestCase):
    """Tests for is_admin and require_admin dependencies."""

    def test_is_admin_uses_configured_token(self) -> None:
        """Test that is_admin compares against settings."""
        settings = AppSettings(admin_token="secret", _env_file=None)

        self.assertTrue(is_admin("secret", settings))
        self.assertFalse(is_admin("other", settings))

    def test_require_admin_passes_for_admin(self) -> None:
        """Test that admins are let through."""
        self.assertIsNone(require_admin(True))

    def test_require_admin_raises_401(self) -> None:
        """Test that non-admins get a 401."""
        with self.assertRaises(HTTPException) as context:
            require_admin(False)
        self.assertEqual(context.exception.status_code, 401)
        self.assertEqual(context.exception.detail, "Unauthorized")


class TestJsonBody(unittest.TestCase):
    """Tests for json_body dependency."""

    def test_returns_object(self) -> None:
        """Test that a JSON object is returned as a dict."""
        result = asyncio.run(json_body(_request_with_body(b'{"title": "T"}')))
        self.assertEqual(result, {"title": "T"})

    def test_malformed_body_is_empty(self) -> None:
        """Test that invalid JSON is treated as an empty object."""
        result = asyncio.run(json_body(_request_with_body(b"{oops")))
        self.assertEqual(result, {})

    def test_empty_body_is_empty(self) -> None:
        """Test that a missing body is treated as an empty object."""
        result = asyncio.run(json_body(_request_with_body(b"")))
        self.assertEqual(result, {})

    def test_non_object_body_is_empty(self) -> None:
        """Test that JSON arrays and scalars are treated as empty objects."""
        for body in (b"[1, 2]", b'"text"', b"null"):
            with self.subTest(body=body):
                self.assertEqual(asyncio.run(json_body(_request_with_body(body))), {})


if __name__ == "__main__":
    unittest.main()
