"""Unit tests for core/direction.py"""

import pytest

from qamark.core.direction import detect_direction, detect_language, is_rtl_language
from qamark.core.models import Direction


@pytest.mark.parametrize("text,language", [
    ("Hello world", "en"),
    ("مرحبا", "ar"),
    ("שלום", "he"),
    ("", "en"),
    ("Bonjour à tous", "en"),
])
def test_detect_language(text, language):
    assert detect_language(text) == language


def test_persian_text_reports_arabic():
    """Persian letters fall inside the Arabic block, which is tested first."""
    assert detect_language("سلام گل") == "ar"


def test_single_hebrew_word_flips_to_rtl():
    """Presence, not majority: one Hebrew word in Latin text is RTL."""
    assert detect_direction("Hello שלום") == Direction.rtl


def test_single_character_flips_to_rtl():
    assert detect_direction("a long english sentence with one letter ب") == Direction.rtl


def test_latin_is_ltr():
    assert detect_direction("Plain English") == Direction.ltr


@pytest.mark.parametrize("language,expected", [("ar", True), ("he", True), ("fa", True), ("en", False), ("de", False)])
def test_is_rtl_language(language, expected):
    assert is_rtl_language(language) is expected
