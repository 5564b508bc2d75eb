"""
LLM provider abstraction.

Provides a provider-agnostic interface for text-generation calls. Providers
make exactly one request per generate() call; retries, deadlines and circuit
breaking are layered on top by the caller (see utils/resilience.py).

SDK failures are translated into the extraction error taxonomy so that
callers never depend on a specific SDK's exception types.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import openai

from jobsift.contexts.intake.exceptions import (
    MalformedReplyError,
    RemoteTimeoutError,
    RemoteUnavailableError,
    TransientRemoteError,
)

DEFAULT_ENDPOINT = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "openai/gpt-4o-mini"
DEFAULT_TEMPERATURE = 0.3
DEFAULT_MAX_TOKENS = 2048

# Status codes worth retrying: request timeout, rate limit, server errors
RETRYABLE_STATUS_CODES = frozenset({408, 429})


def is_retryable_status(status_code: int) -> bool:
    return status_code in RETRYABLE_STATUS_CODES or 500 <= status_code < 600


# --- LLM Provider Classes ---


@dataclass
class LLMResponse:
    """Response from an LLM provider."""

    content: str
    model: str
    input_tokens: int
    output_tokens: int


class LLMProvider(ABC):
    """
    Abstract base for LLM providers.

    Subclasses must:
    - Set _provider_prefix class attribute (e.g., "openrouter")
    - Implement _call_api() for the actual API call, raising
      TransientRemoteError / RemoteUnavailableError on failure
    - Call update_model(model) in __init__ to set model and name
    """

    _provider_prefix: str

    name: str
    model: str

    def update_model(self, model: str):
        """Update the model and refresh the provider name."""
        self.model = model
        self.name = f"{self._provider_prefix}/{model}"

    @abstractmethod
    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """Make a single API call (no retries). Implemented by subclasses."""
        pass

    def generate(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """Generate a response from the LLM (single attempt)."""
        return self._call_api(system_prompt, user_prompt)


class OpenAICompatibleProvider(LLMProvider):
    """
    Chat-completions provider for any OpenAI-compatible endpoint (OpenRouter by default).

    The SDK's own retry loop is disabled (max_retries=0) so that the retry
    policy lives in one place.

    Args:
        credential: Bearer credential for the endpoint
        model: Model identifier (e.g., "openai/gpt-4o-mini")
        endpoint: Base URL of the OpenAI-compatible API
        timeout_seconds: Per-request timeout
        referer: Optional HTTP-Referer header (OpenRouter app attribution)
        app_title: Optional X-Title header (OpenRouter app attribution)
    """

    _provider_prefix = "openrouter"

    def __init__(
        self,
        credential: str,
        model: str = DEFAULT_MODEL,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout_seconds: float = 30.0,
        referer: Optional[str] = None,
        app_title: Optional[str] = None,
        temperature: float = DEFAULT_TEMPERATURE,
    ):
        if not credential:
            raise ValueError("credential must not be empty")

        headers = {}
        if referer:
            headers["HTTP-Referer"] = referer
        if app_title:
            headers["X-Title"] = app_title

        self.client = openai.OpenAI(
            api_key=credential,
            base_url=endpoint,
            timeout=timeout_seconds,
            max_retries=0,
            default_headers=headers or None,
        )
        self.endpoint = endpoint
        self.temperature = temperature
        self.update_model(model)

    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                temperature=self.temperature,
                max_tokens=DEFAULT_MAX_TOKENS,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except openai.APITimeoutError as e:
            raise RemoteTimeoutError("Request to text-generation endpoint timed out") from e
        except openai.APIConnectionError as e:
            raise TransientRemoteError(
                "Could not connect to text-generation endpoint", detail=str(e)
            ) from e
        except openai.APIStatusError as e:
            message = f"Text-generation endpoint returned HTTP {e.status_code}"
            if is_retryable_status(e.status_code):
                raise TransientRemoteError(message, status_code=e.status_code) from e
            raise RemoteUnavailableError(message, detail=str(e)) from e
        except openai.OpenAIError as e:
            # Response validation and any other SDK failure
            raise RemoteUnavailableError(
                "Text-generation endpoint call failed", detail=f"{e.__class__.__name__}: {e}"
            ) from e

        if not response.choices or response.choices[0].message.content is None:
            raise MalformedReplyError("Reply contained no message content")

        usage = response.usage
        return LLMResponse(
            content=response.choices[0].message.content,
            model=response.model or self.model,
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
        )
