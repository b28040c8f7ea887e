"""
Tests for the cipher engines and their registry.
"""
import pytest

from app.core.exceptions import (
    AnalysisError,
    EngineNotFoundError,
    InvalidKeyError,
    InvalidKeyLengthError,
    ValidationError,
)
from app.models.schemas import CipherFamily, CipherType
from app.services.engines.polyalphabetic.vigenere import vigenere_decrypt, vigenere_encrypt
from app.services.engines.registry import EngineRegistry


class TestCipherRegistry:
    """Test the cipher registry."""

    def test_all_ciphers_registered(self):
        registered = EngineRegistry.list_registered()

        for cipher_type in (CipherType.CAESAR, CipherType.VIGENERE):
            assert cipher_type in registered, f"{cipher_type} not registered"

    def test_get_engines_by_family(self):
        registry = EngineRegistry()

        mono = registry.get_engines_by_family(CipherFamily.MONOALPHABETIC)
        poly = registry.get_engines_by_family(CipherFamily.POLYALPHABETIC)

        assert [e.cipher_type for e in mono] == [CipherType.CAESAR]
        assert [e.cipher_type for e in poly] == [CipherType.VIGENERE]

    def test_engine_instances_are_cached(self):
        registry = EngineRegistry()

        assert registry.get_engine(CipherType.VIGENERE) is registry.get_engine(CipherType.VIGENERE)

    def test_require_missing_engine(self, monkeypatch):
        monkeypatch.setattr(EngineRegistry, "_engines", {})
        monkeypatch.setattr(EngineRegistry, "_instances", {})

        with pytest.raises(EngineNotFoundError):
            EngineRegistry().require_engine(CipherType.CAESAR)


class TestVigenerePrimitives:
    """Test the encrypt/decrypt contract."""

    def test_known_example(self):
        assert vigenere_encrypt("ATTACKATDAWN", "LEMON") == "LXFOPVEFRNHR"
        assert vigenere_decrypt("LXFOPVEFRNHR", "LEMON") == "ATTACKATDAWN"

    def test_non_letters_do_not_advance_key(self):
        ciphertext = vigenere_encrypt("ATTACK AT DAWN!", "LEMON")

        assert ciphertext == "LXFOPV EF RNHR!"
        assert vigenere_decrypt(ciphertext, "lemon") == "ATTACK AT DAWN!"

    def test_key_a_is_identity(self):
        assert vigenere_encrypt("HELLO", "A") == "HELLO"


class TestVigenereEngine:
    """Test the Vigenère engine."""

    @pytest.fixture
    def engine(self):
        return EngineRegistry().get_engine(CipherType.VIGENERE)

    def test_encrypt_decrypt(self, engine):
        encrypted = engine.encrypt("ATTACKATDAWN", "LEMON")
        result = engine.decrypt_with_key(encrypted, "LEMON")

        assert result.plaintext == "ATTACKATDAWN"
        assert result.confidence == 1.0

    @pytest.mark.parametrize("key", ["", "LEM0N", "LE MON"])
    def test_invalid_key(self, engine, key):
        assert engine.validate_key(key) is False
        with pytest.raises(InvalidKeyError):
            engine.encrypt("HELLO", key)

    def test_generate_random_key(self, engine):
        for _ in range(50):
            key = engine.generate_random_key()
            assert engine.validate_key(key)
            assert 4 <= len(key) <= 10

    def test_find_key_and_decrypt(self, engine, lemon_ciphertext, english_text):
        result = engine.find_key_and_decrypt(lemon_ciphertext, {})

        assert result.key == "LEMON"
        assert result.plaintext == english_text.upper()
        assert "LEMON" in result.explanation

    def test_attempt_decrypt_forced_length(self, engine, lemon_ciphertext):
        candidates = engine.attempt_decrypt(lemon_ciphertext, {"key_length": 5})

        assert len(candidates) == 1
        assert candidates[0].key == "LEMON"
        assert candidates[0].method == "kasiski_ic_chi_squared"

    def test_numeric_string_options_are_accepted(self, engine, lemon_ciphertext):
        candidates = engine.attempt_decrypt(
            lemon_ciphertext, {"key_length": "5", "max_key_length": "9"}
        )

        assert [c.key for c in candidates] == ["LEMON"]

    @pytest.mark.parametrize(
        "options",
        [{"key_length": "five"}, {"max_key_length": [5]}, {"alternatives": "many"}],
    )
    def test_non_integer_options_rejected(self, engine, lemon_ciphertext, options):
        with pytest.raises(ValidationError):
            engine.attempt_decrypt(lemon_ciphertext, options)

    def test_zero_search_bound_rejected(self, engine, lemon_ciphertext):
        with pytest.raises(InvalidKeyLengthError):
            engine.attempt_decrypt(lemon_ciphertext, {"max_key_length": 0})

    def test_attempt_decrypt_candidates_are_distinct(self, engine, lemon_ciphertext):
        candidates = engine.attempt_decrypt(lemon_ciphertext, {})
        keys = [c.key for c in candidates]

        assert keys[0] == "LEMON"
        assert len(keys) == len(set(keys))

    def test_no_letters_cannot_be_broken(self, engine):
        with pytest.raises(AnalysisError):
            engine.find_key_and_decrypt("1234 5678", {})

    def test_explain(self, engine):
        explanation = engine.explain("LXFOPVEFRNHR", "ATTACKATDAWN", "LEMON")

        assert "L=11" in explanation
        assert "length 5" in explanation
