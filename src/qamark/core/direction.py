"""Script-based language and text-direction detection"""

import re

from qamark.core.models import Direction


# Tested in this order; presence of a single character decides.
# The Persian range is a subset of the Arabic block, so Arabic always wins it.
SCRIPT_PATTERNS: list[tuple[str, re.Pattern]] = [
    ("ar", re.compile(r"[\u0600-\u06FF]")),
    ("he", re.compile(r"[\u0590-\u05FF]")),
    ("fa", re.compile(r"[\u06A0-\u06FF]")),
]
RTL_LANGUAGES = {"ar", "he", "fa"}
DEFAULT_LANGUAGE = "en"


def detect_language(text: str) -> str:
    """Return 'ar', 'he' or 'fa' if any character of that script is present, else 'en'."""
    for language, pattern in SCRIPT_PATTERNS:
        if pattern.search(text):
            return language
    return DEFAULT_LANGUAGE


def is_rtl_language(language: str) -> bool:
    return language in RTL_LANGUAGES


def detect_direction(text: str) -> Direction:
    """Presence test, not a majority vote: one RTL character flips the result."""
    return Direction.rtl if is_rtl_language(detect_language(text)) else Direction.ltr
