"""Exceptions raised by providers for upstream conditions that are not HTTP errors."""


class ProviderError(Exception):
    """The upstream answered, but with an error payload or an unusable shape.

    ``status_code`` is the HTTP status the API layer should answer with and
    ``message`` is safe to show to clients.
    """

    def __init__(self, message: str, status_code: int = 502) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ProviderNotConfigured(ProviderError):
    """A required API key is missing."""

    def __init__(self, api_name: str) -> None:
        super().__init__(f"{api_name} is not configured", status_code=503)
