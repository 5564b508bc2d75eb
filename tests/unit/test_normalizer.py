"""
Tests for posting text normalization and the input validation gate.
"""

import pytest

from jobsift.contexts.intake.normalizer import (
    collapse_blank_lines,
    decode_entities,
    is_valid_input,
    normalize_job_text,
    normalize_unicode,
    normalize_whitespace,
    remove_webpage_noise,
    truncate_text,
)


class TestDecodingAndUnicode:
    """Entity decoding and unicode cleanup."""

    def test_decodes_named_and_numeric_entities(self):
        assert decode_entities("R&amp;D &#8364;50k&nbsp;bonus") == "R&D \u20ac50k\u00a0bonus"

    def test_non_breaking_space_becomes_space(self):
        assert normalize_unicode("Senior\u00a0Engineer") == "Senior Engineer"

    def test_zero_width_characters_removed(self):
        assert normalize_unicode("Py\u200bthon") == "Python"

    def test_smart_quotes_and_dashes(self):
        result = normalize_unicode("\u201cWhat you\u2019ll do\u201d \u2013 build")
        assert result == "\"What you'll do\" - build"


class TestWhitespace:
    """Whitespace collapsing keeps line structure."""

    def test_collapses_horizontal_runs(self):
        assert normalize_whitespace("Senior   Python\t\tDeveloper") == "Senior Python Developer"

    def test_keeps_line_breaks(self):
        assert normalize_whitespace("Title  \nCompany\r\nRemote") == "Title\nCompany\nRemote"

    def test_three_or_more_breaks_collapse_to_two(self):
        assert collapse_blank_lines("a\n\n\n\nb") == "a\n\nb"

    def test_two_breaks_untouched(self):
        assert collapse_blank_lines("a\n\nb") == "a\n\nb"


class TestNoiseRemoval:
    """Markup blocks stripped wholesale."""

    def test_script_and_style_removed(self):
        text = "Job<script>var x = 1;</script> text<style>.a{color:red}</style> here"
        assert remove_webpage_noise(text) == "Job text here"

    def test_comments_nav_footer_header_removed(self):
        text = (
            "<header>Site</header>Intro\n"
            "<nav><a>Home</a></nav>Body<!-- tracking -->\n"
            "<footer>Copyright</footer>"
        )
        result = remove_webpage_noise(text)
        assert "Site" not in result
        assert "Home" not in result
        assert "tracking" not in result
        assert "Copyright" not in result
        assert "Intro" in result and "Body" in result

    def test_ad_container_removed(self):
        text = "Before <div class=\"ad\">Buy now!</div> after"
        assert "Buy now" not in remove_webpage_noise(text)

    def test_entity_encoded_script_removed_by_full_pipeline(self):
        text = "Senior Developer role &lt;script&gt;alert(1)&lt;/script&gt; apply today"
        result = normalize_job_text(text)
        assert "alert" not in result
        assert result.startswith("Senior Developer role")
        assert result.endswith("apply today")


class TestNormalizeJobText:
    """Full normalization pipeline."""

    def test_pipeline_is_pure_and_stable(self):
        text = "  Senior&nbsp;Python Developer\n\n\n\nTechCorp Inc.  "
        once = normalize_job_text(text)
        assert once == "Senior Python Developer\n\nTechCorp Inc."
        assert normalize_job_text(once) == once

    def test_truncate_prefers_word_boundary(self):
        text = "word " * 100
        result = truncate_text(text, 52)
        assert len(result) <= 52
        assert result.endswith("word")

    def test_truncate_leaves_short_text(self):
        assert truncate_text("short text", 100) == "short text"


@pytest.mark.unit
@pytest.mark.parametrize(
    "text",
    [
        None,
        "",
        "     \n\t ",
        "too short",
        "!!!! #### $$$$ %%%% ^^^^ &&&&",
        "one two three four",
    ],
)
def test_invalid_input_rejected(text):
    """Empty, short, symbol-heavy and under-five-word inputs are rejected."""
    assert is_valid_input(text) is False


@pytest.mark.unit
def test_minimal_valid_posting_accepted():
    """Five plain words over ten characters pass the gate."""
    assert is_valid_input("Senior Python developer needed now") is True


@pytest.mark.unit
def test_symbol_ratio_boundary():
    """Exactly half symbols is still accepted; more than half is not."""
    assert is_valid_input("a!! b!! c!! d!! e!") is True
    assert is_valid_input("a!! b!! c!! d!! e!!") is False
