"""
Job record data structures for the Intake context.

Provides ExtractedRecord, the structured result of one extraction call,
plus the enums and sentinel values shared by the remote and heuristic paths.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, Optional

from jobsift.contexts.intake.extraction_cache import fingerprint

# =============================================================================
# SENTINEL VALUES
# =============================================================================

DEFAULT_TITLE = "Job Position"
DEFAULT_COMPANY = "Company Name"
DEFAULT_SKILL = "See job description"
NOT_SPECIFIED = "Not specified"


class ExperienceLevel(str, Enum):
    ENTRY = "Entry-level"
    MID = "Mid-level"
    SENIOR = "Senior"
    NOT_SPECIFIED = NOT_SPECIFIED


class LocationMode(str, Enum):
    REMOTE = "Remote"
    HYBRID = "Hybrid"
    ON_SITE = "On-site"
    NOT_SPECIFIED = NOT_SPECIFIED


# Wire names used by the remote schema and by to_dict()
_WIRE_FIELDS = {
    "title": "title",
    "company": "company",
    "skills": "skills",
    "experiencelevel": "experience_level",
    "location": "location",
    "salaryrange": "salary_range",
    "descriptionsummary": "summary",
    "summary": "summary",
    "experience": "experience_level",
    "salary": "salary_range",
}


@dataclass(frozen=True)
class RawPosting:
    """Input text plus its content fingerprint. Lives for one extraction call."""

    text: str
    fingerprint: str

    @classmethod
    def from_text(cls, text: str) -> "RawPosting":
        return cls(text=text, fingerprint=fingerprint(text))


@dataclass(frozen=True)
class ExtractedRecord:
    """
    Structured job posting.

    Frozen so that the copy handed to the caller and the copy held by the
    cache can never alias mutable state. A record with an empty summary is
    a "partial" record (heuristic fields only).
    """

    title: str = DEFAULT_TITLE
    company: str = DEFAULT_COMPANY
    skills: tuple = field(default=(DEFAULT_SKILL,))
    experience_level: str = ExperienceLevel.NOT_SPECIFIED.value
    location: str = LocationMode.NOT_SPECIFIED.value
    salary_range: str = NOT_SPECIFIED
    summary: str = ""

    # =========================================================================
    # FACTORY METHODS
    # =========================================================================

    @classmethod
    def from_dict(cls, data: dict) -> "ExtractedRecord":
        """
        Build a record from a wire-format dict.

        Keys are matched case-insensitively and both camelCase wire names
        (experienceLevel) and snake_case attribute names (experience_level)
        are accepted. Unknown keys are ignored. Values are not defaulted;
        call with_defaults() for that.
        """
        return cls(**read_wire_fields(data))

    # =========================================================================
    # PUBLIC API METHODS
    # =========================================================================

    def to_dict(self) -> dict:
        """Serialize using the wire field names (camelCase)."""
        return {
            "title": self.title,
            "company": self.company,
            "skills": list(self.skills),
            "experienceLevel": self.experience_level,
            "location": self.location,
            "salaryRange": self.salary_range,
            "descriptionSummary": self.summary,
        }

    def with_summary(self, summary: str) -> "ExtractedRecord":
        return replace(self, summary=summary)

    def with_defaults(self) -> "ExtractedRecord":
        return apply_defaults(self)

    @property
    def is_partial(self) -> bool:
        return not self.summary.strip()


def read_wire_fields(data: dict) -> dict:
    """
    Map wire-format keys onto ExtractedRecord attribute names.

    Keys are normalized (underscores dropped, lowercased) before lookup.
    None values and unknown keys are skipped; strings are stripped and
    skills are coerced to a tuple.
    """
    fields = {}
    for key, value in data.items():
        attribute = _WIRE_FIELDS.get(str(key).replace("_", "").lower())
        if attribute is None or value is None:
            continue
        if attribute == "skills":
            fields[attribute] = tuple(_coerce_skills(value))
        else:
            fields[attribute] = str(value).strip()
    return fields


def _coerce_skills(value) -> list[str]:
    """Accept a list of skills or a comma/semicolon separated string."""
    if isinstance(value, str):
        items: Iterable = value.replace(";", ",").split(",")
    elif isinstance(value, (list, tuple, set)):
        items = value
    else:
        return []
    return [str(item).strip() for item in items if item is not None and str(item).strip()]


def _dedupe(items: Iterable[str]) -> tuple:
    """Drop duplicates (case-insensitive) while keeping first-seen order."""
    seen = set()
    unique = []
    for item in items:
        key = item.lower()
        if key not in seen:
            seen.add(key)
            unique.append(item)
    return tuple(unique)


def _valid_or_default(value: Optional[str], allowed: type[Enum]) -> str:
    value = getattr(value, "value", value)
    values = {member.value for member in allowed}
    return value if value in values else NOT_SPECIFIED


def apply_defaults(record: ExtractedRecord) -> ExtractedRecord:
    """
    Fill sentinel values so the record satisfies the output invariants.

    - title and company are never blank
    - skills is never empty (and holds no duplicates)
    - experience_level and location are members of their enums
    - salary_range is never blank

    The summary is left untouched; the orchestrator rebuilds a blank summary
    because that needs the source text.
    """
    skills = _dedupe(s.strip() for s in record.skills if s and s.strip())
    return replace(
        record,
        title=record.title.strip() or DEFAULT_TITLE,
        company=record.company.strip() or DEFAULT_COMPANY,
        skills=skills or (DEFAULT_SKILL,),
        experience_level=_valid_or_default(record.experience_level, ExperienceLevel),
        location=_valid_or_default(record.location, LocationMode),
        salary_range=record.salary_range.strip() or NOT_SPECIFIED,
    )
