"""
Heuristic field extraction from normalized posting text.

Derives title, company, skills, experience level, location mode and salary
range using pattern matching only. This module has no LLM dependencies and
cannot fail on validated text: every field falls back to a sentinel.

Each field is an ordered list of independent matchers. A matcher returns a
value or None; the first non-None value wins.
"""

from typing import Callable, Optional, Sequence

from jobsift.contexts.intake.extraction_patterns import (
    SKILL_VOCABULARY,
    CompanyPatterns,
    ExperiencePatterns,
    LocationPatterns,
    SalaryPatterns,
    TitlePatterns,
)
from jobsift.contexts.intake.job_record import (
    DEFAULT_COMPANY,
    DEFAULT_SKILL,
    DEFAULT_TITLE,
    NOT_SPECIFIED,
    ExperienceLevel,
    ExtractedRecord,
    LocationMode,
)

Matcher = Callable[..., Optional[str]]


def first_match(matchers: Sequence[Matcher], *args) -> Optional[str]:
    """Run matchers in order and return the first non-None result."""
    for matcher in matchers:
        value = matcher(*args)
        if value:
            return value
    return None


def split_lines(text: str) -> list[str]:
    """Non-empty, stripped lines in document order."""
    return [line.strip() for line in text.split("\n") if line.strip()]


# =============================================================================
# TITLE
# =============================================================================


def _clean_title_line(line: str) -> str:
    return TitlePatterns.LINE_PREFIX.sub("", line).strip()


def looks_like_title(line: str) -> bool:
    """Check a single line against the title rules."""
    lower = line.lower()
    if not TitlePatterns.MIN_LENGTH <= len(line) <= TitlePatterns.MAX_LENGTH:
        return False
    if not any(keyword in lower for keyword in TitlePatterns.ROLE_KEYWORDS):
        return False
    if any(phrase in lower for phrase in TitlePatterns.EXCLUDED_PHRASES):
        return False
    if any(marker in line for marker in TitlePatterns.EXCLUDED_MARKERS):
        return False
    return True


def _find_title_index(lines: list[str]) -> Optional[int]:
    for index, line in enumerate(lines):
        if looks_like_title(_clean_title_line(line)):
            return index
    return None


def extract_title(text: str) -> str:
    """First line that reads like a job title, else the sentinel."""
    lines = split_lines(text)
    index = _find_title_index(lines)
    if index is None:
        return DEFAULT_TITLE
    return _clean_title_line(lines[index])


# =============================================================================
# COMPANY
# =============================================================================


def _company_from_legal_suffix(text: str, lines: list[str]) -> Optional[str]:
    match = CompanyPatterns.LEGAL_SUFFIX.search(text)
    if match:
        return match.group(1).strip()
    return None


def _company_from_at_pattern(text: str, lines: list[str]) -> Optional[str]:
    match = CompanyPatterns.AT_COMPANY.search(text)
    if not match:
        return None

    candidate = match.group(1).strip().rstrip(".,").strip()
    if not 0 < len(candidate) <= CompanyPatterns.AT_COMPANY_MAX_LENGTH:
        return None

    lower = candidate.lower()
    if any(phrase in lower for phrase in CompanyPatterns.NOISE_PHRASES):
        return None
    return candidate


def _company_from_line_after_title(text: str, lines: list[str]) -> Optional[str]:
    index = _find_title_index(lines)
    if index is None or index + 1 >= len(lines):
        return None

    candidate = lines[index + 1]
    lower = candidate.lower()
    if not (
        CompanyPatterns.NEXT_LINE_MIN_LENGTH <= len(candidate) <= CompanyPatterns.NEXT_LINE_MAX_LENGTH
    ):
        return None
    if not candidate[0].isupper():
        return None
    if any(word in lower for word in CompanyPatterns.NEXT_LINE_NOISE):
        return None
    # Dots usually mean a rating ("3.3") or a sentence, digits a count or date
    if "." in candidate or candidate[0].isdigit():
        return None
    return candidate


COMPANY_MATCHERS: tuple = (
    _company_from_legal_suffix,
    _company_from_at_pattern,
    _company_from_line_after_title,
)


def extract_company(text: str) -> str:
    """Company name by legal suffix, "at <Company>", or the line after the title."""
    return first_match(COMPANY_MATCHERS, text, split_lines(text)) or DEFAULT_COMPANY


# =============================================================================
# SKILLS
# =============================================================================


def extract_skills(text: str) -> list[str]:
    """Vocabulary skills mentioned in the text, in vocabulary order."""
    lower = text.lower()
    skills = [skill for skill in SKILL_VOCABULARY if skill.lower() in lower]
    return skills or [DEFAULT_SKILL]


# =============================================================================
# EXPERIENCE LEVEL
# =============================================================================


def _experience_from_keywords(lower: str) -> Optional[str]:
    if ExperiencePatterns.SENIOR.search(lower):
        return ExperienceLevel.SENIOR.value
    if ExperiencePatterns.ENTRY.search(lower):
        return ExperienceLevel.ENTRY.value
    if ExperiencePatterns.MID.search(lower):
        return ExperienceLevel.MID.value
    return None


def _experience_from_years(lower: str) -> Optional[str]:
    match = ExperiencePatterns.YEARS.search(lower)
    if not match:
        return None
    years = int(match.group(1))
    if years >= ExperiencePatterns.SENIOR_MIN_YEARS:
        return ExperienceLevel.SENIOR.value
    if years >= ExperiencePatterns.MID_MIN_YEARS:
        return ExperienceLevel.MID.value
    return ExperienceLevel.ENTRY.value


EXPERIENCE_MATCHERS: tuple = (_experience_from_keywords, _experience_from_years)


def classify_experience(text: str) -> str:
    """Map free text ("Senior", "5+ years", "entry/mid/senior/lead") to an ExperienceLevel value."""
    return first_match(EXPERIENCE_MATCHERS, text.lower()) or ExperienceLevel.NOT_SPECIFIED.value


# =============================================================================
# LOCATION
# =============================================================================


def classify_location(text: str) -> str:
    """Map free text to a LocationMode value (remote, then hybrid, then on-site)."""
    lower = text.lower()
    if LocationPatterns.REMOTE.search(lower):
        return LocationMode.REMOTE.value
    if LocationPatterns.HYBRID.search(lower):
        return LocationMode.HYBRID.value
    if LocationPatterns.ON_SITE.search(lower):
        return LocationMode.ON_SITE.value
    return LocationMode.NOT_SPECIFIED.value


# =============================================================================
# SALARY
# =============================================================================


def _salary_range(text: str) -> Optional[str]:
    match = SalaryPatterns.SALARY_RANGE.search(text)
    if match:
        currency, low, high = match.groups()
        return f"{currency}{low} - {currency}{high}"
    return None


def _salary_single(text: str) -> Optional[str]:
    match = SalaryPatterns.SALARY_SINGLE.search(text)
    if match:
        currency, amount = match.groups()
        return f"{currency}{amount}"
    return None


SALARY_MATCHERS: tuple = (_salary_range, _salary_single)


def extract_salary_range(text: str) -> str:
    """Currency-prefixed salary range or single amount, else "Not specified"."""
    return first_match(SALARY_MATCHERS, text) or NOT_SPECIFIED


# =============================================================================
# ALL FIELDS
# =============================================================================


def extract_fields(text: str) -> ExtractedRecord:
    """
    Extract every heuristic field from normalized text.

    Args:
        text: Normalized posting text

    Returns:
        Partial ExtractedRecord (summary left empty)
    """
    return ExtractedRecord(
        title=extract_title(text),
        company=extract_company(text),
        skills=tuple(extract_skills(text)),
        experience_level=classify_experience(text),
        location=classify_location(text),
        salary_range=extract_salary_range(text),
    )
