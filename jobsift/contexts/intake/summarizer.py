"""
Structured summary builder for job postings.

Renders the descriptionSummary field used by the heuristic path (and to fill
a blank summary from the remote path):

    **Senior Python Developer** at **TechCorp Inc.**

    📍 Remote | 👤 Senior | 💰 $120k - $150k

    **About:** TechCorp Inc. is a leading provider of ...

    **Key Responsibilities:**
    • Build and maintain APIs
    ...

Each part is optional except the header line. Parts are joined with blank lines.
"""

from typing import Optional

from jobsift.contexts.intake.job_record import NOT_SPECIFIED
from jobsift.contexts.intake.section_patterns import (
    SUMMARY_SECTIONS,
    BoilerplatePatterns,
    CompanyDescriptionPatterns,
    SectionBoundaryPatterns,
    SummarySection,
    is_bullet_candidate,
    strip_bullet_marker,
)

LOCATION_ICON = "\U0001f4cd"
EXPERIENCE_ICON = "\U0001f464"
SALARY_ICON = "\U0001f4b0"
BULLET = "•"


# =============================================================================
# BOILERPLATE
# =============================================================================


def strip_webpage_boilerplate(text: str) -> str:
    """
    Keep only the posting body of a pasted job-board page.

    Slices after the "Full job description" marker when present, then cuts
    at the earliest footer marker.
    """
    marker = BoilerplatePatterns.FULL_DESCRIPTION_MARKER
    marker_index = text.lower().find(marker)
    if marker_index >= 0:
        text = text[marker_index + len(marker) :].strip()

    lower = text.lower()
    footer_positions = [
        position
        for position in (lower.find(m.lower()) for m in BoilerplatePatterns.FOOTER_MARKERS)
        if position >= 0
    ]
    if footer_positions:
        text = text[: min(footer_positions)].strip()

    return text


# =============================================================================
# COMPANY DESCRIPTION
# =============================================================================


def _truncate_sentence(sentence: str) -> str:
    limit = CompanyDescriptionPatterns.MAX_SENTENCE_CHARS
    if len(sentence) <= limit:
        return sentence
    sentence = sentence[:limit].rstrip()
    last_space = sentence.rfind(" ")
    if last_space > CompanyDescriptionPatterns.WORD_BOUNDARY_MIN_CHARS:
        sentence = sentence[:last_space] + "..."
    return sentence


def _is_legal_boilerplate(sentence: str) -> bool:
    lower = sentence.lower()
    if "equal opportunity" in lower:
        return True
    return "employer" in lower and len(sentence) < CompanyDescriptionPatterns.EMPLOYER_MIN_CHARS


def extract_company_description(text: str, company: str) -> Optional[str]:
    """
    Find the sentence introducing the company ("Acme is a leading ...").

    Args:
        text: Posting text
        company: Company name; only its first token is searched for

    Returns:
        The sentence (max 300 chars), or None if nothing qualifies
    """
    tokens = [t for t in CompanyDescriptionPatterns.NAME_TOKEN_SPLIT.split(company) if t]
    if not tokens:
        return None

    lower = text.lower()
    company_index = lower.find(tokens[0].lower())
    if company_index < 0:
        return None

    window = lower[company_index : company_index + CompanyDescriptionPatterns.MAX_COPULA_DISTANCE]

    for copula in CompanyDescriptionPatterns.COPULAS:
        offset = window.find(copula)
        if offset < 0:
            continue
        copula_index = company_index + offset

        # Sentence starts after the previous period or line break
        sentence_start = max(text.rfind(".", 0, company_index), text.rfind("\n", 0, company_index)) + 1

        sentence_end = text.find(".", copula_index + len(copula))
        if sentence_end < 0:
            sentence_end = min(copula_index + CompanyDescriptionPatterns.FALLBACK_SENTENCE_CHARS, len(text))

        sentence = text[sentence_start : sentence_end + 1].strip()
        if not sentence or _is_legal_boilerplate(sentence):
            continue

        return _truncate_sentence(sentence)

    return None


# =============================================================================
# SECTIONS
# =============================================================================


def _section_window(text: str, lower: str, anchor: str) -> Optional[str]:
    anchor_index = lower.find(anchor)
    if anchor_index < 0:
        return None

    # Window opens on the line after the anchor
    start = anchor_index + len(anchor)
    newline_index = text.find("\n", start)
    if newline_index > 0:
        start = newline_index + 1

    end = start + SectionBoundaryPatterns.MAX_WINDOW_CHARS
    for header in SectionBoundaryPatterns.SECTION_HEADERS:
        if header == anchor:
            continue
        header_index = lower.find(header, start)
        if start < header_index < end:
            end = header_index

    return text[start : min(end, len(text))]


def extract_section_bullets(text: str, section: SummarySection) -> list[str]:
    """
    Capture up to section.max_bullets qualifying lines after a section anchor.

    Anchors are tried in their configured order. An anchor whose window
    yields no qualifying lines falls through to the next anchor.
    """
    lower = text.lower()
    for anchor in section.anchors:
        window = _section_window(text, lower, anchor)
        if window is None:
            continue
        lines = (strip_bullet_marker(line) for line in window.split("\n"))
        bullets = [line for line in lines if is_bullet_candidate(line)]
        if bullets:
            return bullets[: section.max_bullets]
    return []


def render_section(section: SummarySection, bullets: list[str]) -> str:
    return "\n".join([section.heading] + [f"{BULLET} {line}" for line in bullets])


# =============================================================================
# SUMMARY
# =============================================================================


def build_detail_line(location: str, experience_level: str, salary_range: str) -> str:
    """Pipe-joined details, leaving out anything "Not specified"."""
    details = [
        (LOCATION_ICON, location),
        (EXPERIENCE_ICON, experience_level),
        (SALARY_ICON, salary_range),
    ]
    return " | ".join(
        f"{icon} {value}" for icon, value in details if value and value != NOT_SPECIFIED
    )


def build_summary(
    text: str,
    title: str,
    company: str,
    experience_level: str,
    location: str,
    salary_range: str,
) -> str:
    """
    Build the structured summary for a posting.

    Args:
        text: Posting text (normalized or raw)
        title: Job title for the header line
        company: Company name for the header line and description lookup
        experience_level: ExperienceLevel value
        location: LocationMode value
        salary_range: Salary string or "Not specified"

    Returns:
        Markdown-flavoured summary; never empty
    """
    body = strip_webpage_boilerplate(text)

    parts = [f"**{title}** at **{company}**"]
    parts.append(build_detail_line(location, experience_level, salary_range))

    about = extract_company_description(body, company) or extract_company_description(text, company)
    if about:
        parts.append(f"**About:** {about}")

    for section in SUMMARY_SECTIONS:
        bullets = extract_section_bullets(body, section)
        if bullets:
            parts.append(render_section(section, bullets))

    return "\n\n".join(part for part in parts if part)
