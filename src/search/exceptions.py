"""Custom exceptions for the web search client."""


class SearchClientError(Exception):
    """Raised when a Brave Search API request fails.

    The message carries the upstream error text (or a truncated body) so it
    can be returned to API callers unchanged.
    """

    pass
