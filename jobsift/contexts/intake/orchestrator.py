"""
Job extraction pipeline.

Validate → cache lookup → normalize → remote attempt (or heuristics) →
defaulting → cache store. Every call that passes validation returns a
complete ExtractedRecord: remote failures of any kind degrade to the
heuristic path instead of propagating.

Example:
    from jobsift.contexts.intake.options import ExtractionOptions
    from jobsift.contexts.intake.orchestrator import JobExtractionOrchestrator

    orchestrator = JobExtractionOrchestrator(ExtractionOptions.from_env())
    record = orchestrator.extract(posting_text)
    print(record.to_dict())
"""

import time
from typing import Optional

from jobsift.contexts.intake.exceptions import (
    CircuitOpenError,
    ExtractionError,
    InvalidInputError,
    RemoteUnavailableError,
    TransientRemoteError,
)
from jobsift.contexts.intake.extraction_cache import (
    CACHE_TTL_SECONDS,
    ExtractionCache,
    InMemoryExtractionCache,
    cache_key,
)
from jobsift.contexts.intake.job_record import ExtractedRecord, RawPosting, apply_defaults
from jobsift.contexts.intake.logger import (
    _log_debug,
    _log_warning,
    log_cache_hit,
    log_extraction_result,
    log_fallback,
)
from jobsift.contexts.intake.metadata_extractor import extract_fields
from jobsift.contexts.intake.metadata_llm import RemoteExtractor
from jobsift.contexts.intake.normalizer import is_valid_input, normalize_job_text, truncate_text
from jobsift.contexts.intake.options import ExtractionOptions
from jobsift.contexts.intake.summarizer import build_summary

REMOTE_PATH = "remote"
HEURISTIC_PATH = "heuristic"


def _needs_attention(error: ExtractionError) -> bool:
    """Non-retryable endpoint failures (auth, bad model) do not clear on their own."""
    return isinstance(error, RemoteUnavailableError) and not isinstance(
        error, (TransientRemoteError, CircuitOpenError)
    )


def summarize_record(record: ExtractedRecord, text: str) -> ExtractedRecord:
    """Attach a heuristic summary built from the record's own fields."""
    return record.with_summary(
        build_summary(
            text,
            title=record.title,
            company=record.company,
            experience_level=record.experience_level,
            location=record.location,
            salary_range=record.salary_range,
        )
    )


class JobExtractionOrchestrator:
    """
    Turns pasted job posting text into an ExtractedRecord.

    Safe to share between threads: the default cache and circuit breaker
    are internally locked and nothing else here is mutated after __init__.
    Concurrent calls for identical text are not coalesced; both run and
    the later store wins.

    Args:
        options: Extraction settings (default: ExtractionOptions.from_env())
        cache: ExtractionCache implementation (default: InMemoryExtractionCache)
        remote: RemoteExtractor to use (default: built from options when a
            credential is configured, otherwise heuristics only)
    """

    def __init__(
        self,
        options: Optional[ExtractionOptions] = None,
        cache: Optional[ExtractionCache] = None,
        remote: Optional[RemoteExtractor] = None,
    ):
        self.options = options if options is not None else ExtractionOptions.from_env()
        self.cache = cache if cache is not None else InMemoryExtractionCache()

        if remote is None and self.options.has_credential:
            remote = RemoteExtractor(self.options)
        if remote is None:
            _log_warning("No credential configured, using heuristic extraction only")
        self.remote = remote

    def extract(self, text: str, deadline_seconds: Optional[float] = None) -> ExtractedRecord:
        """
        Extract structured job data from raw posting text.

        Args:
            text: Raw posting text as pasted
            deadline_seconds: Time budget for the remote attempt (None = unbounded)

        Returns:
            ExtractedRecord satisfying all output invariants

        Raises:
            InvalidInputError: If the text fails validation (nothing else escapes)
        """
        self._validate(text)
        if deadline_seconds is not None and deadline_seconds <= 0:
            raise InvalidInputError(f"deadline_seconds must be positive, got: {deadline_seconds}")

        posting = RawPosting.from_text(text)
        key = cache_key(posting.fingerprint)

        cached = self.cache.get(key)
        if cached is not None:
            log_cache_hit(posting.fingerprint)
            return ExtractedRecord.from_dict(cached)

        start_time = time.perf_counter()
        normalized = self._normalize(text)

        record, path = self._attempt(normalized, deadline_seconds)
        record = apply_defaults(record)
        if record.is_partial:
            record = summarize_record(record, normalized)

        self.cache.set(key, record.to_dict(), CACHE_TTL_SECONDS)
        log_extraction_result(record, path, time.perf_counter() - start_time)
        return record

    def extract_with_heuristics(self, text: str) -> ExtractedRecord:
        """
        Offline extraction: heuristics only, no cache, no network.

        Raises:
            InvalidInputError: If the text fails validation
        """
        self._validate(text)
        normalized = self._normalize(text)
        return summarize_record(apply_defaults(extract_fields(normalized)), normalized)

    # =========================================================================
    # PIPELINE STEPS
    # =========================================================================

    @staticmethod
    def _validate(text: str) -> None:
        if not is_valid_input(text):
            raise InvalidInputError(
                "Invalid job text",
                detail="need at least 10 characters and 5 words of mostly alphanumeric text",
                snippet=text if isinstance(text, str) else None,
            )

    def _normalize(self, text: str) -> str:
        normalized = normalize_job_text(text)
        truncated = truncate_text(normalized, self.options.max_text_length)
        if len(truncated) < len(normalized):
            _log_debug(f"Truncated text from {len(normalized)} to {len(truncated)} chars")
        return truncated

    def _attempt(
        self, normalized: str, deadline_seconds: Optional[float]
    ) -> tuple[ExtractedRecord, str]:
        if self.remote is not None:
            try:
                return self.remote.call_remote(normalized, deadline_seconds), REMOTE_PATH
            except ExtractionError as e:
                log_fallback(
                    f"{e.__class__.__name__}: {e.message}", needs_attention=_needs_attention(e)
                )

        return extract_fields(normalized), HEURISTIC_PATH
