"""
LLM-based extraction of structured job data.

Sends normalized posting text to an OpenAI-compatible chat endpoint and parses
the JSON object embedded in the reply. Network resilience (retry with
backoff, circuit breaker, optional deadline) is composed around the single
provider call here; deciding whether to fall back is the orchestrator's job.
"""

import json
import time
from typing import Callable, Optional

from jobsift.contexts.intake.exceptions import ConfigurationMissingError, MalformedReplyError
from jobsift.contexts.intake.job_record import (
    DEFAULT_COMPANY,
    DEFAULT_SKILL,
    DEFAULT_TITLE,
    NOT_SPECIFIED,
    ExtractedRecord,
    read_wire_fields,
)
from jobsift.contexts.intake.logger import _log_debug, log_remote_attempt
from jobsift.contexts.intake.metadata_extractor import classify_experience, classify_location
from jobsift.contexts.intake.options import ExtractionOptions
from jobsift.utils.llm import LLMProvider, LLMResponse, OpenAICompatibleProvider
from jobsift.utils.resilience import CircuitBreaker, retry_with_backoff, with_timeout

# =============================================================================
# PROMPT TEMPLATES
# =============================================================================

SYSTEM_PROMPT = """\
You are a job data extraction assistant. Extract structured information from job postings \
and return ONLY valid JSON with no additional text."""

_USER_PROMPT_TEMPLATE = """\
Extract structured job data from the following job posting and return ONLY a JSON object \
with these exact fields:

{{
  "title": "job title",
  "company": "company name",
  "skills": ["skill1", "skill2"],
  "experienceLevel": "entry/mid/senior/lead",
  "location": "location or remote",
  "salaryRange": "salary range or empty string",
  "descriptionSummary": "Create a well-formatted summary using this EXACT structure:

**About:** [1-2 sentence company description if available]

**Key Responsibilities:**
• [Key responsibility 1]
• [Key responsibility 2]
• [Key responsibility 3]

**Requirements:**
• [Requirement 1]
• [Requirement 2]
• [Requirement 3]

**Benefits:** [Benefits if mentioned, otherwise omit this section]

Use bullet points (•) for lists. Keep each bullet point concise (under 100 characters). \
Include only the most important 3-4 items per section. \
If a section is not mentioned in the job posting, omit it entirely."
}}

Job posting:
{content}

Return ONLY the JSON object, no additional text."""

BREAKER_NAME = "text-generation"


def build_extraction_prompt(job_text: str) -> str:
    """
    Build the user prompt carrying the output schema and the posting.

    Args:
        job_text: Normalized (and already truncated) posting text

    Returns:
        User prompt string for the LLM
    """
    return _USER_PROMPT_TEMPLATE.format(content=job_text)


# =============================================================================
# RESPONSE PARSING
# =============================================================================


def extract_embedded_json(text: Optional[str]) -> Optional[dict]:
    """
    Parse the JSON object embedded in a reply.

    Takes the substring from the first "{" to the last "}", so markdown
    fences and surrounding prose are ignored.

    Returns:
        The parsed dict, or None if there are no braces, the substring is not
        valid JSON, or it does not decode to an object
    """
    if not text:
        return None

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None

    try:
        result = json.loads(text[start : end + 1])
    except json.JSONDecodeError:
        return None

    return result if isinstance(result, dict) else None



def parse_remote_reply(content: str) -> ExtractedRecord:
    """
    Turn reply content into an ExtractedRecord.

    Field names are matched case-insensitively. Experience and location are
    mapped onto their enums with the same classifiers the heuristics use.
    Blank title, company and skills get their sentinels; a blank salary
    becomes "Not specified". The summary is kept as-is (possibly blank).

    Raises:
        MalformedReplyError: If no JSON object is found or it has no usable field
    """
    data = extract_embedded_json(content)
    if data is None:
        raise MalformedReplyError("Failed to extract valid JSON from reply", snippet=content)

    fields = read_wire_fields(data)
    if not any(fields.values()):
        raise MalformedReplyError("Reply JSON has none of the expected fields", snippet=content)

    return ExtractedRecord(
        title=fields.get("title") or DEFAULT_TITLE,
        company=fields.get("company") or DEFAULT_COMPANY,
        skills=fields.get("skills") or (DEFAULT_SKILL,),
        experience_level=classify_experience(fields.get("experience_level", "")),
        location=classify_location(fields.get("location", "")),
        salary_range=fields.get("salary_range") or NOT_SPECIFIED,
        summary=fields.get("summary", ""),
    )


# =============================================================================
# REMOTE EXTRACTOR
# =============================================================================


class RemoteExtractor:
    """
    Structured extraction through a text-generation endpoint.

    One call_remote() composes, from the inside out: the provider's single
    request, the circuit breaker, retry with exponential backoff on transient
    failures, and an optional overall deadline.

    Args:
        options: Endpoint, credential, model and resilience settings
        provider: LLMProvider to use (default: OpenAICompatibleProvider from options)
        breaker: Shared CircuitBreaker (default: one built from options)
        sleep: Sleep function used between retries (injectable for tests)

    Raises:
        ConfigurationMissingError: If options carry no credential
    """

    def __init__(
        self,
        options: ExtractionOptions,
        provider: Optional[LLMProvider] = None,
        breaker: Optional[CircuitBreaker] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if not options.has_credential:
            raise ConfigurationMissingError(
                "No credential configured for the text-generation endpoint",
                detail="set OPENROUTER_API_KEY or pass credential in ExtractionOptions",
            )

        self.options = options
        self.provider = provider or OpenAICompatibleProvider(
            credential=options.credential,
            model=options.model,
            endpoint=options.endpoint,
            timeout_seconds=options.timeout_seconds,
            referer=options.referer,
            app_title=options.app_title,
        )
        self.breaker = breaker or CircuitBreaker(
            BREAKER_NAME,
            failure_threshold=options.failure_threshold,
            recovery_timeout=options.recovery_timeout_seconds,
        )
        self._sleep = sleep

    def call_budget(self, deadline_seconds: Optional[float] = None) -> float:
        """Overall seconds allowed for one call, retries and backoff included."""
        if deadline_seconds is None:
            return float(self.options.timeout_seconds)
        return min(deadline_seconds, float(self.options.timeout_seconds))

    def call_remote(
        self, normalized_text: str, deadline_seconds: Optional[float] = None
    ) -> ExtractedRecord:
        """
        Extract a record from normalized text via the remote endpoint.

        Args:
            normalized_text: Normalized, truncated posting text
            deadline_seconds: Caller time budget including retries. The call is
                always bounded by options.timeout_seconds; a shorter deadline wins.

        Returns:
            ExtractedRecord parsed from the reply (summary may be blank)

        Raises:
            RemoteUnavailableError: Endpoint failed, breaker open, or deadline passed
            MalformedReplyError: Reply carried no usable JSON
        """
        log_remote_attempt(self.options.endpoint, self.options.model, self.options.credential)

        user_prompt = build_extraction_prompt(normalized_text)
        protected = self.breaker.protect(self.provider.generate)

        call = with_timeout(
            retry_with_backoff(
                lambda: protected(SYSTEM_PROMPT, user_prompt),
                max_retries=self.options.max_retries,
                sleep=self._sleep,
                error_message="Text-generation endpoint unavailable",
            ),
            self.call_budget(deadline_seconds),
        )
        response: LLMResponse = call()

        _log_debug(
            f"Reply from {response.model}: {len(response.content)} chars "
            f"({response.input_tokens} in / {response.output_tokens} out tokens)"
        )
        return parse_remote_reply(response.content)
