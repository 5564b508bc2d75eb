"""
Reusable patterns and constants for heuristic field extraction.

This module provides the keyword vocabularies and regex patterns used by
metadata_extractor.py to derive title, company, skills, experience level,
location mode and salary range without any remote call.

Pattern classes follow the usual convention:
- Dataclasses with frozen=True for immutability
- Class-level constants for patterns
- Helper functions that use these patterns
"""

import re
from dataclasses import dataclass

# =============================================================================
# TITLE PATTERNS
# =============================================================================


@dataclass(frozen=True)
class TitlePatterns:
    """
    Keyword lists for picking the job title line.

    A title line contains a role keyword and none of the heading-noise markers.
    """

    ROLE_KEYWORDS: tuple = (
        "developer",
        "engineer",
        "designer",
        "manager",
        "analyst",
        "architect",
        "lead",
        "senior",
        "junior",
        "specialist",
        "consultant",
    )

    # Lowercase phrases that mark form labels or search-page chrome
    EXCLUDED_PHRASES: tuple = ("what", "where", "job title", "keywords")

    # Case-sensitive markers: markdown emphasis, "Title at Company", detail-line emoji
    EXCLUDED_MARKERS: tuple = ("**", " at ", "\U0001f4cd", "\U0001f464")

    MIN_LENGTH: int = 6
    MAX_LENGTH: int = 99

    # Leading markdown hashes / bullets stripped before checking a line
    LINE_PREFIX: re.Pattern = re.compile(r"^(?:#{1,6}|[*\-])\s+")


# =============================================================================
# COMPANY PATTERNS
# =============================================================================


@dataclass(frozen=True)
class CompanyPatterns:
    """
    Regex patterns for locating the hiring company.

    Rules are tried in order (legal suffix, "at <Company>", line after title).
    Uses literal spaces (not \\s) to prevent matching across line breaks.
    """

    # Capitalized words followed by a legal suffix - e.g., "TechCorp Inc.", "Acme Widgets LLC"
    LEGAL_SUFFIX: re.Pattern = re.compile(
        r"\b((?:[A-Z][\w&'-]*[ ]+)+(?:Inc\.?|Corp\.?|Corporation|LLC|Ltd\.?|Limited|Co\.))(?![A-Za-z])"
    )

    # "at Company" / "@ Company" up to end of line, comma or " -"
    AT_COMPANY: re.Pattern = re.compile(
        r"(?:\bat|@)[ \t]+([A-Z][A-Za-z0-9 &.,]*?)(?=\n|$|,|[ \t]-)", re.MULTILINE
    )

    AT_COMPANY_MAX_LENGTH: int = 49

    # Matches for "at <...>" that are page chrome, not a company
    NOISE_PHRASES: tuple = ("job title", "keywords", "company", "indeed", "glassdoor")

    # Words that disqualify the line after the title from being a company name
    NEXT_LINE_NOISE: tuple = (
        "remote",
        "hybrid",
        "location",
        "salary",
        "user research",
        "responsive",
        "skills",
        "£",
        "$",
    )

    NEXT_LINE_MIN_LENGTH: int = 3
    NEXT_LINE_MAX_LENGTH: int = 99


# =============================================================================
# SKILL VOCABULARY
# =============================================================================

# Order matters: extracted skills are reported in vocabulary order.
# Matching is a plain case-insensitive substring test, so "PostgreSQL" also
# yields "SQL" and "JavaScript" also yields "Java".
SKILL_VOCABULARY = (
    "React",
    "Angular",
    "Vue",
    "JavaScript",
    "TypeScript",
    "Node.js",
    "Python",
    "Java",
    "C#",
    ".NET",
    "AWS",
    "Azure",
    "GCP",
    "Docker",
    "Kubernetes",
    "SQL",
    "MongoDB",
    "PostgreSQL",
    "Redis",
    "Git",
    "CI/CD",
    "Agile",
    "Scrum",
    "REST",
    "GraphQL",
    "HTML",
    "CSS",
    "Tailwind",
    "Bootstrap",
)


# =============================================================================
# EXPERIENCE PATTERNS
# =============================================================================


@dataclass(frozen=True)
class ExperiencePatterns:
    """
    Patterns for classifying seniority (applied to lowercased text).

    Checked in priority order: senior, entry, mid, then years of experience.
    """

    SENIOR: re.Pattern = re.compile(r"\b(?:senior|sr\.|lead)")
    ENTRY: re.Pattern = re.compile(r"\b(?:junior|jr\.|entry)")
    MID: re.Pattern = re.compile(r"\b(?:mid|intermediate)")

    # "5+ years", "3 years", "1 year"
    YEARS: re.Pattern = re.compile(r"(\d+)\+?\s*years?\b")

    SENIOR_MIN_YEARS: int = 5
    MID_MIN_YEARS: int = 2


# =============================================================================
# LOCATION PATTERNS
# =============================================================================


@dataclass(frozen=True)
class LocationPatterns:
    """
    Work arrangement indicators (applied to lowercased text).

    Checked in order: remote, hybrid, on-site.
    """

    REMOTE: re.Pattern = re.compile(r"\bremote")
    HYBRID: re.Pattern = re.compile(r"\bhybrid")
    ON_SITE: re.Pattern = re.compile(r"\b(?:on-site|onsite|office)")


# =============================================================================
# SALARY PATTERNS
# =============================================================================

_AMOUNT = r"(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d+)?[kK]?"


@dataclass(frozen=True)
class SalaryPatterns:
    """
    Regex patterns for extracting salary information.

    Group 1 is the currency symbol; the formatted output reuses it for both
    ends of a range.
    """

    # "$80,000 - $100,000", "£50k to £70k", "$80k-100k"
    SALARY_RANGE: re.Pattern = re.compile(
        rf"([£$])\s*({_AMOUNT})\s*(?:-|to)\s*[£$]?\s*({_AMOUNT})"
    )

    # "$90k", "£45,000"
    SALARY_SINGLE: re.Pattern = re.compile(rf"([£$])\s*({_AMOUNT})")
