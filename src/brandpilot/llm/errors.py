"""Errors raised while talking to an LLM provider or the execute-node API."""
from __future__ import annotations

from typing import Any


class LLMError(Exception):
    """Root of the LLM error tree. ``cause`` keeps the transport exception, if any."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ProviderError(LLMError):
    """The remote API answered with a non-success status.

    ``retryable`` defaults per subclass and may be overridden per instance.
    """

    retryable = False

    def __init__(
        self,
        message: str,
        *,
        provider: str = "",
        status_code: int | None = None,
        error_code: str | None = None,
        raw: dict[str, Any] | None = None,
        retryable: bool | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.provider = provider
        self.status_code = status_code
        self.error_code = error_code
        self.raw = raw
        if retryable is not None:
            self.retryable = retryable


class InvalidRequestError(ProviderError):
    pass


class AuthenticationError(ProviderError):
    """Rejected credentials: missing, wrong or revoked key."""


class NotFoundError(ProviderError):
    """Usually an unknown model name."""


class RateLimitError(ProviderError):
    retryable = True


class ServerError(ProviderError):
    retryable = True


class RequestTimeoutError(LLMError):
    pass


class NetworkError(LLMError):
    """Connection refused, DNS failure and other transport errors."""


class ConfigurationError(LLMError):
    """No adapter for the requested provider."""


_BY_STATUS: dict[int, type[ProviderError]] = {
    400: InvalidRequestError,
    401: AuthenticationError,
    403: AuthenticationError,
    404: NotFoundError,
    422: InvalidRequestError,
    429: RateLimitError,
}


def error_from_status_code(
    status_code: int,
    message: str,
    *,
    provider: str = "",
    error_code: str | None = None,
    raw: dict[str, Any] | None = None,
) -> ProviderError:
    """Build the error type matching an HTTP status.

    Unlisted 5xx codes become :class:`ServerError`; anything else falls back
    to a retryable :class:`ProviderError`.
    """
    error_type = _BY_STATUS.get(status_code)
    if error_type is None:
        error_type = ServerError if status_code >= 500 else ProviderError
    retryable = True if error_type is ProviderError else None
    return error_type(
        message,
        provider=provider,
        status_code=status_code,
        error_code=error_code,
        raw=raw,
        retryable=retryable,
    )
