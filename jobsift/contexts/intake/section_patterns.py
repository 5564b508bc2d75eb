"""
Pattern constants for summary building.

Anchors that open the responsibilities / requirements / benefits sections,
the headers that close a section window, webpage boilerplate markers and the
line filters applied to captured bullets.

Pattern classes follow the usual convention:
- Dataclasses with frozen=True for immutability
- Class-level constants for patterns
- Helper functions that use these patterns
"""

import re
from dataclasses import dataclass

# =============================================================================
# SECTION ANCHORS
# =============================================================================


@dataclass(frozen=True)
class SummarySection:
    """One summary section: heading, anchors (checked in order) and bullet cap."""

    name: str
    heading: str
    anchors: tuple
    max_bullets: int


RESPONSIBILITIES = SummarySection(
    name="responsibilities",
    heading="**Key Responsibilities:**",
    anchors=("responsibilities:", "what you'll do", "you will:", "your role"),
    max_bullets=4,
)

REQUIREMENTS = SummarySection(
    name="requirements",
    heading="**Requirements:**",
    anchors=(
        "minimum qualifications:",
        "qualifications:",
        "requirements:",
        "you have",
        "ideal candidate",
    ),
    max_bullets=4,
)

BENEFITS = SummarySection(
    name="benefits",
    heading="**Benefits:**",
    anchors=("benefits:", "what we offer:", "perks:", "we offer:"),
    max_bullets=3,
)

# Rendering order
SUMMARY_SECTIONS = (RESPONSIBILITIES, REQUIREMENTS, BENEFITS)


# =============================================================================
# SECTION BOUNDARIES
# =============================================================================


@dataclass(frozen=True)
class SectionBoundaryPatterns:
    """
    Markers that end a captured section window.

    All values are lowercase; matching happens on lowercased text.
    """

    SECTION_HEADERS: tuple = (
        "responsibilities:",
        "qualifications:",
        "requirements:",
        "benefits:",
        "minimum qualifications:",
        "addition qualifications:",
        "what we offer:",
        "about the role:",
        "your role:",
        "what you'll do:",
        "perks:",
    )

    # Hard cap on a section window when no later header is found
    MAX_WINDOW_CHARS: int = 1000


# =============================================================================
# WEBPAGE BOILERPLATE
# =============================================================================


@dataclass(frozen=True)
class BoilerplatePatterns:
    """Job-board chrome surrounding the actual posting."""

    # Everything before this marker is search-page chrome (matched case-insensitively)
    FULL_DESCRIPTION_MARKER: str = "full job description"

    # Everything from the earliest marker on is site footer (matched case-insensitively)
    FOOTER_MARKERS: tuple = (
        "Hiring Lab",
        "Career advice",
        "Browse jobs",
        "\u00a9 20",
        "ESG at Indeed",
    )


# =============================================================================
# COMPANY DESCRIPTION
# =============================================================================


@dataclass(frozen=True)
class CompanyDescriptionPatterns:
    """Rules for finding the "<Company> is a ..." sentence."""

    # Tried in order; the more specific copulas come first
    COPULAS: tuple = (
        " is a leading ",
        " is the leading ",
        " is a ",
        " is the ",
        " is an ",
    )

    # Copula must start within this many chars of the company name
    MAX_COPULA_DISTANCE: int = 50

    # Sentence end when no period follows the copula
    FALLBACK_SENTENCE_CHARS: int = 300

    MAX_SENTENCE_CHARS: int = 300
    WORD_BOUNDARY_MIN_CHARS: int = 250

    # Short sentences mentioning "employer" are EEO boilerplate
    EMPLOYER_MIN_CHARS: int = 100

    NAME_TOKEN_SPLIT: re.Pattern = re.compile(r"[ ,.]+")


# =============================================================================
# BULLET LINE FILTERS
# =============================================================================


@dataclass(frozen=True)
class BulletFilterPatterns:
    """Which captured lines are worth rendering as bullets."""

    MIN_LENGTH: int = 11
    MAX_LENGTH: int = 299

    # Leading bullet markers stripped before filtering
    BULLET_PREFIX: re.Pattern = re.compile(r"^\s*(?:[-*•·▪●]\s*|\d+[.)]\s+)")

    EXCLUDED_PHRASES: tuple = ("official communications", "equal opportunity")
    EXCLUDED_SUBSTRINGS: tuple = ("@", ".com")
    EXCLUDED_PREFIXES: tuple = ("we are proud", "we offer")


def is_bullet_candidate(line: str) -> bool:
    """
    Check whether a stripped line qualifies as a summary bullet.

    Args:
        line: Line with bullet markers already removed

    Returns:
        True if the line passes every filter
    """
    if not BulletFilterPatterns.MIN_LENGTH <= len(line) <= BulletFilterPatterns.MAX_LENGTH:
        return False
    if line.startswith("#"):
        return False

    lower = line.lower()
    if any(phrase in lower for phrase in BulletFilterPatterns.EXCLUDED_PHRASES):
        return False
    if any(substring in lower for substring in BulletFilterPatterns.EXCLUDED_SUBSTRINGS):
        return False
    if lower.startswith(BulletFilterPatterns.EXCLUDED_PREFIXES):
        return False
    return True


def strip_bullet_marker(line: str) -> str:
    """Remove a leading bullet / list marker and surrounding whitespace."""
    return BulletFilterPatterns.BULLET_PREFIX.sub("", line.strip(), count=1).strip()
