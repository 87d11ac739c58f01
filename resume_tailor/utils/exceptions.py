"""Exceptions raised by the LLM transport."""

from typing import Optional


class LLMError(Exception):
    """
    Base exception for failed chat-completion requests.

    Attributes:
        message: Error description
        status_code: HTTP status returned by the endpoint, if any
        response_body: Raw response body returned by the endpoint, if any
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.response_body = response_body

        parts = [message]

        if status_code is not None:
            parts.append(f"Status: {status_code}")

        if response_body:
            # Truncate body if too long
            body = response_body[:500] + "..." if len(response_body) > 500 else response_body
            parts.append(f"Response body:\n{body}")

        super().__init__("\n".join(parts))


class MissingAPIKeyError(LLMError, ValueError):
    """
    Exception raised when no API credential is configured.

    This is a configuration error: it is raised before any request is sent
    and is never retried.
    """

    pass


class LLMTimeoutError(LLMError):
    """Exception raised when a request times out (after all retries, when raised by generate())."""

    def __init__(self, message: str, attempts: int = 1):
        self.attempts = attempts
        super().__init__(message)


class LLMRequestError(LLMError):
    """Exception raised for non-timeout failures: HTTP errors, connection errors, bad payloads."""

    pass
