"""
Extraction configuration.

ExtractionOptions can be built three ways:
- directly (tests, library use)
- from environment variables (.env is loaded on import): ExtractionOptions.from_env()
- from a YAML file via OmegaConf, with ${oc.env:VAR} interpolation: ExtractionOptions.from_yaml()

Example YAML:

    extraction:
      credential: ${oc.env:OPENROUTER_API_KEY,""}
      model: openai/gpt-4o-mini
      max_retries: 2
      timeout_seconds: 20
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()

DEFAULT_ENDPOINT = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "openai/gpt-4o-mini"

# Environment variable → field name
ENV_VARS = {
    "OPENROUTER_API_KEY": "credential",
    "OPENROUTER_BASE_URL": "endpoint",
    "OPENROUTER_MODEL": "model",
    "EXTRACTION_MAX_RETRIES": "max_retries",
    "EXTRACTION_TIMEOUT_SECONDS": "timeout_seconds",
    "EXTRACTION_MAX_TEXT_LENGTH": "max_text_length",
}

# YAML files may nest options under this key
YAML_SECTION = "extraction"

_INT_FIELDS = {"max_retries", "timeout_seconds", "max_text_length", "failure_threshold"}
_FLOAT_FIELDS = {"recovery_timeout_seconds"}


def _check_range(name: str, value: int, low: int, high: int) -> None:
    if not low <= value <= high:
        raise ValueError(f"{name} must be between {low} and {high}, got: {value}")


@dataclass(frozen=True)
class ExtractionOptions:
    """
    Settings for one orchestrator.

    Attributes:
        endpoint: Base URL of the OpenAI-compatible API
        credential: Bearer credential ("" = offline, heuristics only)
        model: Model identifier sent with each request
        max_retries: Additional attempts on transient failures (0-10)
        timeout_seconds: Per-request timeout (1-300)
        max_text_length: Normalized text is truncated to this length (1-100000)
        failure_threshold: Consecutive failures that open the circuit breaker
        recovery_timeout_seconds: Breaker cool-down before a trial call
        referer: Optional HTTP-Referer header for app attribution
        app_title: Optional X-Title header for app attribution
    """

    endpoint: str = DEFAULT_ENDPOINT
    credential: str = ""
    model: str = DEFAULT_MODEL
    max_retries: int = 3
    timeout_seconds: int = 30
    max_text_length: int = 10000
    failure_threshold: int = 5
    recovery_timeout_seconds: float = 30.0
    referer: Optional[str] = None
    app_title: Optional[str] = None

    def __post_init__(self):
        _check_range("max_retries", self.max_retries, 0, 10)
        _check_range("timeout_seconds", self.timeout_seconds, 1, 300)
        _check_range("max_text_length", self.max_text_length, 1, 100000)

        if self.failure_threshold < 1:
            raise ValueError(f"failure_threshold must be >= 1, got: {self.failure_threshold}")
        if self.recovery_timeout_seconds <= 0:
            raise ValueError(
                f"recovery_timeout_seconds must be positive, got: {self.recovery_timeout_seconds}"
            )
        if not self.endpoint.startswith(("http://", "https://")):
            raise ValueError(f"endpoint must be an http(s) URL, got: {self.endpoint!r}")
        if not 1 <= len(self.model) <= 100:
            raise ValueError("model must be 1-100 characters")

    @property
    def has_credential(self) -> bool:
        return bool(self.credential and self.credential.strip())

    @classmethod
    def from_mapping(cls, values: dict) -> "ExtractionOptions":
        """
        Build options from a plain dict, coercing numeric strings.

        Raises:
            ValueError: On unknown keys or values outside the allowed ranges
        """
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ValueError(f"Unknown extraction option(s): {', '.join(sorted(unknown))}")

        kwargs = {}
        for name, value in values.items():
            if value is None:
                continue
            if name in _INT_FIELDS:
                value = int(value)
            elif name in _FLOAT_FIELDS:
                value = float(value)
            else:
                value = str(value)
            kwargs[name] = value
        return cls(**kwargs)

    @classmethod
    def from_env(cls) -> "ExtractionOptions":
        """Build options from OPENROUTER_* / EXTRACTION_* environment variables."""
        values = {}
        for env_var, name in ENV_VARS.items():
            value = os.getenv(env_var)
            if value is not None and value.strip():
                values[name] = value.strip()
        return cls.from_mapping(values)

    @classmethod
    def from_yaml(cls, config_path: Path) -> "ExtractionOptions":
        """
        Load options from a YAML file (flat, or nested under "extraction:").

        Args:
            config_path: Path to the YAML file

        Returns:
            ExtractionOptions with interpolations resolved
        """
        loaded = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True) or {}
        if YAML_SECTION in loaded:
            loaded = loaded[YAML_SECTION] or {}
        return cls.from_mapping(loaded)
