"""
Tests for the structured summary builder.
"""

import pytest

from jobsift.contexts.intake.section_patterns import BENEFITS, REQUIREMENTS, RESPONSIBILITIES
from jobsift.contexts.intake.summarizer import (
    build_detail_line,
    build_summary,
    extract_company_description,
    extract_section_bullets,
    strip_webpage_boilerplate,
)

POSTING = """TechCorp is a leading technology company that specializes in innovative solutions.

Responsibilities:
- Design and build scalable backend services
- Review pull requests from teammates
- Mentor junior engineers on the team
- Improve monitoring and alerting coverage
- Participate in the on-call rotation weekly
- Write technical design documents

Requirements:
- 5+ years of professional Python experience
- Solid understanding of relational databases

Benefits:
- Generous health, dental and vision coverage
- Flexible working hours and remote days
- Annual learning and development budget
- Company-wide summer retreat every year
"""


class TestBoilerplate:
    """Job-board chrome stripping."""

    def test_keeps_text_after_full_description_marker(self):
        text = "Search jobs\nSign in\nFull job description\nThe actual posting body"
        assert strip_webpage_boilerplate(text) == "The actual posting body"

    def test_cuts_at_earliest_footer_marker(self):
        text = "Posting body text\nCareer advice\nHiring Lab\nBrowse jobs"
        assert strip_webpage_boilerplate(text) == "Posting body text"

    def test_untouched_without_markers(self):
        assert strip_webpage_boilerplate("Plain posting") == "Plain posting"


class TestCompanyDescription:
    """Locating the "<Company> is a ..." sentence."""

    def test_leading_copula_sentence(self):
        result = extract_company_description(POSTING, "TechCorp Inc.")
        assert result == (
            "TechCorp is a leading technology company that specializes in innovative solutions."
        )

    def test_sentence_starts_after_previous_period(self):
        text = "Join us today. Acme is a robotics startup building warehouse automation. Apply now."
        assert (
            extract_company_description(text, "Acme")
            == "Acme is a robotics startup building warehouse automation."
        )

    def test_equal_opportunity_sentence_skipped(self):
        text = "Acme is an equal opportunity employer."
        assert extract_company_description(text, "Acme") is None

    def test_long_sentence_truncated_at_word_boundary(self):
        text = "Acme is a company " + "that builds things " * 30 + "."
        result = extract_company_description(text, "Acme")
        assert len(result) <= 303
        assert result.endswith("...")

    def test_missing_company(self):
        assert extract_company_description(POSTING, "Globex") is None


class TestSections:
    """Anchored bullet capture."""

    def test_responsibilities_capped_at_four(self):
        bullets = extract_section_bullets(POSTING, RESPONSIBILITIES)
        assert bullets == [
            "Design and build scalable backend services",
            "Review pull requests from teammates",
            "Mentor junior engineers on the team",
            "Improve monitoring and alerting coverage",
        ]

    def test_window_stops_at_next_section_header(self):
        bullets = extract_section_bullets(POSTING, REQUIREMENTS)
        assert bullets == [
            "5+ years of professional Python experience",
            "Solid understanding of relational databases",
        ]

    def test_benefits_capped_at_three(self):
        assert len(extract_section_bullets(POSTING, BENEFITS)) == 3

    def test_filtered_lines_dropped(self):
        text = (
            "Benefits:\n"
            "- Email jobs@acme.com for details\n"
            "- We offer great perks to everyone\n"
            "- Short one\n"
            "- Paid parental leave for all parents\n"
        )
        assert extract_section_bullets(text, BENEFITS) == ["Paid parental leave for all parents"]

    def test_empty_anchor_falls_through_to_next(self):
        text = (
            "Benefits:\n"
            "See below\n"
            "\n"
            "Perks:\n"
            "- Paid parental leave for all parents\n"
            "- Annual learning budget for every engineer\n"
        )
        assert extract_section_bullets(text, BENEFITS) == [
            "Paid parental leave for all parents",
            "Annual learning budget for every engineer",
        ]

    def test_missing_section(self):
        assert extract_section_bullets("No structure in this posting at all", BENEFITS) == []


@pytest.mark.unit
def test_detail_line_omits_not_specified():
    """Only known details are rendered."""
    assert build_detail_line("Remote", "Not specified", "$90k") == "\U0001f4cd Remote | \U0001f4b0 $90k"
    assert build_detail_line("Not specified", "Not specified", "Not specified") == ""


@pytest.mark.unit
def test_build_summary_layout():
    """Header, details, about and sections joined by blank lines."""
    summary = build_summary(
        POSTING,
        title="Senior Backend Engineer",
        company="TechCorp",
        experience_level="Senior",
        location="Remote",
        salary_range="Not specified",
    )
    parts = summary.split("\n\n")

    assert parts[0] == "**Senior Backend Engineer** at **TechCorp**"
    assert parts[1] == "\U0001f4cd Remote | \U0001f464 Senior"
    assert parts[2].startswith("**About:** TechCorp is a leading technology company")
    assert parts[3].startswith("**Key Responsibilities:**\n• Design and build")
    assert parts[3].count("• ") == 4
    assert parts[4].startswith("**Requirements:**")
    assert parts[5].startswith("**Benefits:**")
    assert parts[5].count("• ") == 3


@pytest.mark.unit
def test_build_summary_minimal_text():
    """Only the header survives when nothing else is found."""
    summary = build_summary(
        "Short posting with nothing structured in it",
        title="Job Position",
        company="Company Name",
        experience_level="Not specified",
        location="Not specified",
        salary_range="Not specified",
    )
    assert summary == "**Job Position** at **Company Name**"
