"""Custom exceptions for the generation provider clients."""

from http import HTTPStatus


class GenerationClientError(Exception):
    """Raised when a text or image generation provider request fails.

    Covers HTTP errors, provider-level errors and empty responses. The message
    is the provider's own error text where one is available, so it can be
    passed through to API callers.

    :param message: Human-readable error message.
    :param status_code: HTTP status the API should answer with.
    """

    def __init__(self, message: str, *, status_code: int = HTTPStatus.BAD_GATEWAY) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)


class ProviderNotConfiguredError(Exception):
    """Raised when a provider is requested but its API key is not configured."""

    def __init__(self, setting_name: str) -> None:
        super().__init__(f"{setting_name} not set")
        self.setting_name = setting_name
