"""
Job posting text normalizer for the Intake context.

Cleans pasted posting text before any extraction runs: decodes HTML entities,
normalizes unicode, collapses horizontal whitespace, strips webpage markup
noise and squeezes runs of blank lines. Line breaks are preserved because the
title and section heuristics are line-based.

Also hosts is_valid_input(), the single validation gate of the pipeline.

Design principle: Normalize BEFORE extracting. Every function here is pure.
"""

import html
import re
import unicodedata
from typing import Optional

# Unicode replacements: problematic char → ASCII equivalent
UNICODE_REPLACEMENTS = {
    # Spaces
    "\u00a0": " ",  # non-breaking space → space
    "\u202f": " ",  # narrow no-break space
    # Zero-width characters → remove
    "\u200b": "",  # zero-width space
    "\u200c": "",  # zero-width non-joiner
    "\u200d": "",  # zero-width joiner
    "\u2060": "",  # word joiner
    "\ufeff": "",  # BOM / zero-width no-break space
    # Quotes
    "\u2018": "'",  # left single quote
    "\u2019": "'",  # right single quote
    "\u201c": '"',  # left double quote
    "\u201d": '"',  # right double quote
    # Dashes
    "\u2013": "-",  # en dash
    "\u2014": "-",  # em dash
    # Bullets and misc
    "\u2022": "*",  # bullet
    "\u2026": "...",  # ellipsis
    "\u00b7": "*",  # middle dot (used as bullet)
}

# Markup blocks removed wholesale (content included)
NOISE_BLOCK_PATTERNS = (
    re.compile(r"<script[^>]*>[\s\S]*?</script>", re.IGNORECASE),
    re.compile(r"<style[^>]*>[\s\S]*?</style>", re.IGNORECASE),
    re.compile(r"<!--[\s\S]*?-->"),
    re.compile(r"<nav[^>]*>[\s\S]*?</nav>", re.IGNORECASE),
    re.compile(r"<footer[^>]*>[\s\S]*?</footer>", re.IGNORECASE),
    re.compile(r"<header[^>]*>[\s\S]*?</header>", re.IGNORECASE),
    re.compile(r"<div[^>]*class\s*=\s*['\"]\s*ads?\s*['\"][^>]*>[\s\S]*?</div>", re.IGNORECASE),
)

_EXCESS_LINE_BREAKS = re.compile(r"(?:[ \t]*\n){3,}")
_HORIZONTAL_WHITESPACE = re.compile(r"[ \t\f\v]+")
_SPECIAL_CHAR = re.compile(r"[^\w\s]")

# Validation thresholds
MIN_INPUT_LENGTH = 10
MIN_WORD_COUNT = 5
MAX_SPECIAL_CHAR_RATIO = 0.5


def decode_entities(text: str) -> str:
    """Decode HTML/character entities (&amp;, &nbsp;, &#8364;, ...)."""
    return html.unescape(text)


def normalize_unicode(text: str) -> str:
    """
    Normalize unicode characters that cause parsing issues.

    Applies NFKC normalization and replaces common problematic characters
    with ASCII equivalents.

    Args:
        text: Raw text possibly containing problematic unicode

    Returns:
        Text with normalized unicode
    """
    # NFKC normalization handles many compatibility characters
    text = unicodedata.normalize("NFKC", text)

    for char, replacement in UNICODE_REPLACEMENTS.items():
        text = text.replace(char, replacement)

    return text


def normalize_whitespace(text: str) -> str:
    """
    Collapse horizontal whitespace runs to a single space.

    Line endings are unified to \\n and each line is right-stripped, but
    line breaks themselves are kept.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _HORIZONTAL_WHITESPACE.sub(" ", text)
    return "\n".join(line.rstrip() for line in text.split("\n"))


def collapse_blank_lines(text: str) -> str:
    """Collapse 3+ consecutive line breaks to exactly two."""
    return _EXCESS_LINE_BREAKS.sub("\n\n", text)


def remove_webpage_noise(text: str) -> str:
    """
    Strip markup noise: script/style blocks, HTML comments, nav/footer/header
    blocks and ad containers. Excess blank lines are collapsed afterwards.
    """
    for pattern in NOISE_BLOCK_PATTERNS:
        text = pattern.sub("", text)
    return collapse_blank_lines(text)


def normalize_job_text(text: str) -> str:
    """
    Normalize pasted job posting text.

    This is the main entry point for text normalization.
    Order matters: entities are decoded first so that encoded markup
    (&lt;script&gt;) is visible to the noise patterns.

    Args:
        text: Raw posting text

    Returns:
        Normalized text ready for extraction
    """
    text = decode_entities(text)
    text = normalize_unicode(text)
    text = normalize_whitespace(text)
    text = remove_webpage_noise(text)
    return text.strip()


def truncate_text(text: str, max_length: int) -> str:
    """Truncate to max_length characters, preferring a word boundary."""
    if len(text) <= max_length:
        return text
    cut = text[:max_length]
    last_space = cut.rfind(" ")
    if last_space > max_length * 0.8:
        cut = cut[:last_space]
    return cut.rstrip()


def is_valid_input(text: Optional[str]) -> bool:
    """
    Check that text is plausible posting prose.

    Rejects:
    - None, empty or whitespace-only text
    - text shorter than MIN_INPUT_LENGTH characters
    - text where more than half the characters are symbols
    - text with fewer than MIN_WORD_COUNT whitespace-delimited tokens
    """
    if text is None or not isinstance(text, str) or not text.strip():
        return False

    if len(text) < MIN_INPUT_LENGTH:
        return False

    special_char_count = len(_SPECIAL_CHAR.findall(text))
    if special_char_count > len(text) * MAX_SPECIAL_CHAR_RATIO:
        return False

    if len(text.split()) < MIN_WORD_COUNT:
        return False

    return True
