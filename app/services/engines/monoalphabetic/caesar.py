import random
import string
from typing import Any, ClassVar

from app.core.exceptions import InvalidKeyError
from app.models.schemas import CipherFamily, CipherType, PlaintextCandidate
from app.services.engines.base import CipherEngine, DecryptionResult
from app.services.engines.registry import EngineRegistry

ALPHABET = string.ascii_uppercase


def caesar_shift(text: str, shift: int) -> str:
    """
    Shift every letter of text by ``shift`` positions, wrapping mod 26.

    Output is uppercase; non-letters pass through unchanged. Decryption is a
    shift by ``-shift``.
    """
    result = []

    for char in text.upper():
        if char in ALPHABET:
            result.append(ALPHABET[(ALPHABET.index(char) + shift) % 26])
        else:
            result.append(char)

    return "".join(result)


@EngineRegistry.register
class CaesarEngine(CipherEngine):
    """
    Caesar cipher engine.

    The Caesar cipher is a simple substitution cipher that shifts each letter
    by a fixed amount. With only 26 possible keys, it can be trivially broken
    by trying all shifts and scoring each result.
    """

    name = "Caesar Cipher"
    cipher_type = CipherType.CAESAR
    cipher_family = CipherFamily.MONOALPHABETIC
    description = (
        "A substitution cipher where each letter is shifted by a fixed amount. "
        "Named after Julius Caesar who used it for military communications."
    )

    ALPHABET: ClassVar[str] = ALPHABET

    def attempt_decrypt(
        self,
        ciphertext: str,
        options: dict[str, Any],
    ) -> list[PlaintextCandidate]:
        """
        Try all 26 shifts and return the best scored candidates.

        Ranking comes from the chi-squared shift search; ties keep the
        lower shift first.
        """
        from app.services.optimization.shift_search import CaesarBreaker

        letters = "".join(c for c in ciphertext.upper() if c in self.ALPHABET)
        if not letters:
            return []

        ranked = sorted(
            CaesarBreaker().score_shifts(letters),
            key=lambda candidate: (candidate.chi_squared, candidate.shift),
        )

        candidates = []
        for shift_candidate in ranked[: self.int_option(options, "top", 5)]:
            candidates.append(PlaintextCandidate(
                plaintext=self._decrypt(ciphertext, shift_candidate.shift),
                score=shift_candidate.chi_squared,
                confidence=self.confidence(shift_candidate.chi_squared),
                cipher_type=self.cipher_type,
                key=str(shift_candidate.shift),
                method="chi_squared_shift_search",
            ))

        return candidates

    def decrypt_with_key(self, ciphertext: str, key: str) -> DecryptionResult:
        """Decrypt with a known shift value."""
        shift = self._parse_key(key)
        plaintext = self._decrypt(ciphertext, shift)

        return DecryptionResult(
            plaintext=plaintext,
            key=str(shift),
            confidence=1.0,  # Known key = certain
            explanation=self.explain(ciphertext, plaintext, str(shift)),
        )

    def encrypt(self, plaintext: str, key: str) -> str:
        """Encrypt plaintext with the given shift."""
        return caesar_shift(plaintext, self._parse_key(key))

    def generate_random_key(self) -> str:
        """Generate a random shift (1-25, excluding 0 and 26)."""
        return str(random.randint(1, 25))

    def validate_key(self, key: str) -> bool:
        """Validate that key parses as an integer shift, or a single letter."""
        try:
            self._parse_key(key)
            return True
        except InvalidKeyError:
            return False

    def explain(self, ciphertext: str, plaintext: str, key: str) -> str:
        """Generate human-readable explanation."""
        shift = self._parse_key(key)

        return (
            f"Caesar cipher with shift of {shift} (key letter {self.ALPHABET[shift]}). "
            f"Each letter was shifted back {shift} positions in the alphabet. "
            f"For example, the first ciphertext letter '{ciphertext[0] if ciphertext else 'N/A'}' "
            f"becomes '{plaintext[0] if plaintext else 'N/A'}'."
        )

    def _parse_key(self, key: str) -> int:
        """Parse key to integer shift value; a letter key means 'A' + shift."""
        key = str(key).strip()
        if len(key) == 1 and key.upper() in self.ALPHABET:
            return self.ALPHABET.index(key.upper())
        try:
            return int(key) % 26
        except ValueError:
            raise InvalidKeyError(f"Invalid Caesar key '{key}'", {"key": key})

    def _decrypt(self, ciphertext: str, shift: int) -> str:
        """Decrypt by shifting in reverse."""
        return caesar_shift(ciphertext, -shift)
