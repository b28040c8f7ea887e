"""Shared fixtures and test environment."""

import os
import tempfile

# Settings are cached on first import, so the test database must be
# configured before anything under app/ is imported.
_db_dir = tempfile.mkdtemp(prefix="vigenere-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_db_dir}/test.db")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402

from app.services.engines.polyalphabetic.vigenere import vigenere_encrypt  # noqa: E402

TALE_OF_TWO_CITIES = (
    "It was the best of times, it was the worst of times, it was the age of "
    "wisdom, it was the age of foolishness, it was the epoch of belief, it was "
    "the epoch of incredulity, it was the season of Light, it was the season of "
    "Darkness, it was the spring of hope, it was the winter of despair, we had "
    "everything before us, we had nothing before us, we were all going direct "
    "to Heaven, we were all going direct the other way. In short, the period "
    "was so far like the present period, that some of its noisiest authorities "
    "insisted on its being received, for good or for evil, in the superlative "
    "degree of comparison only. There were a king with a large jaw and a queen "
    "with a plain face, on the throne of England; there were a king with a "
    "large jaw and a queen with a fair face, on the throne of France. In both "
    "countries it was clearer than crystal to the lords of the State preserves "
    "of loaves and fishes, that things in general were settled for ever. It "
    "was the year of Our Lord one thousand seven hundred and seventy-five. "
    "Spiritual revelations were conceded to England at that favoured period, "
    "as at this. Mrs. Southcott had recently attained her five-and-twentieth "
    "blessed birthday, of whom a prophetic private in the Life Guards had "
    "heralded the sublime appearance by announcing that arrangements were made "
    "for the swallowing up of London and Westminster. Even the Cock-lane ghost "
    "had been laid only a round dozen of years, after rapping out its messages, "
    "as the spirits of this very year last past rapped out theirs."
)


def letters_only(text: str) -> str:
    return "".join(c for c in text.upper() if c.isalpha())


@pytest.fixture
def english_text():
    """About 1200 letters of English prose, punctuation included."""
    return TALE_OF_TWO_CITIES


@pytest.fixture
def english_letters():
    """The same prose, normalized to A-Z."""
    return letters_only(TALE_OF_TWO_CITIES)


@pytest.fixture
def lemon_ciphertext():
    """The prose enciphered with key LEMON, punctuation kept in place."""
    return vigenere_encrypt(TALE_OF_TWO_CITIES, "LEMON")


@pytest.fixture
def lemon_letters(lemon_ciphertext):
    return letters_only(lemon_ciphertext)
