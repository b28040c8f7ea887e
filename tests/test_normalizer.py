"""Tests for ciphertext normalization."""

import pytest

from app.services.preprocessing.normalizer import TextNormalizer


class TestTextNormalizer:
    """Test suite for the letters-only normalizer."""

    @pytest.fixture
    def normalizer(self):
        return TextNormalizer()

    def test_uppercases_and_strips(self, normalizer):
        assert normalizer.normalize("Attack at dawn!") == "ATTACKATDAWN"

    def test_fullwidth_letters_fold_to_ascii(self, normalizer):
        assert normalizer.normalize("ＬＥＭＯＮ") == "LEMON"

    def test_accented_letters_are_dropped(self, normalizer):
        assert normalizer.normalize("Héllo, Wörld") == "HLLOWRLD"

    def test_removed_chars_are_counted(self, normalizer):
        result = normalizer.normalize_full("a b, c!")

        assert result.text == "ABC"
        assert result.original == "a b, c!"
        assert result.removed_chars == {" ": 2, ",": 1, "!": 1}
        assert len(result) == 3

    def test_no_letters(self, normalizer):
        assert normalizer.normalize("1234 ?!") == ""
