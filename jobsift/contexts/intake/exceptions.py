"""Exception hierarchy for the intake context."""

from typing import Optional


class ExtractionError(Exception):
    """
    Base class for job extraction failures.

    Attributes:
        message: Error description
        detail: Optional extra context (status code, reason, etc.)
        snippet: Optional text that caused the failure (truncated in the message)
    """

    def __init__(
        self,
        message: str,
        detail: Optional[str] = None,
        snippet: Optional[str] = None,
    ):
        self.message = message
        self.detail = detail
        self.snippet = snippet

        parts = [message]

        if detail:
            parts.append(f"Detail: {detail}")

        if snippet:
            snippet = snippet[:200] + "..." if len(snippet) > 200 else snippet
            parts.append(f"\nOffending text:\n{snippet}")

        super().__init__("\n".join(parts))


class InvalidInputError(ExtractionError, ValueError):
    """Raised when posting text fails validation. Never retried."""

    pass


class RemoteUnavailableError(ExtractionError):
    """Raised when the text-generation endpoint cannot produce a reply (network, non-2xx)."""

    pass


class TransientRemoteError(RemoteUnavailableError):
    """Remote failure worth retrying (timeouts, connection drops, 408/429/5xx)."""

    def __init__(self, message: str, status_code: Optional[int] = None, **kwargs):
        self.status_code = status_code
        super().__init__(message, **kwargs)


class RemoteTimeoutError(TransientRemoteError):
    """Raised when a remote call exceeds its time budget."""

    pass


class CircuitOpenError(RemoteUnavailableError):
    """
    Raised when the circuit breaker rejects a call without touching the network.

    Attributes:
        breaker_name: Name of the rejecting breaker
        time_remaining: Seconds until the breaker allows a trial call
    """

    def __init__(self, breaker_name: str, time_remaining: float):
        self.breaker_name = breaker_name
        self.time_remaining = time_remaining
        super().__init__(
            f"Circuit '{breaker_name}' is open",
            detail=f"retry in {time_remaining:.1f}s",
        )


class MalformedReplyError(ExtractionError):
    """Raised when a reply carries no usable JSON object."""

    pass


class ConfigurationMissingError(ExtractionError):
    """Raised when the remote extractor is built without a credential."""

    pass
