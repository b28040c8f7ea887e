from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from app.core.exceptions import AnalysisError, ValidationError
from app.models.schemas import CipherFamily, CipherType, PlaintextCandidate

# Chi-squared of ordinary English against the reference table is roughly 20-50;
# anything at or beyond this maps to zero confidence.
CONFIDENCE_CEILING = 500.0


@dataclass
class DecryptionResult:
    """Plaintext recovered by an engine, with the key that produced it."""

    plaintext: str
    key: str
    confidence: float
    explanation: str


class CipherEngine(ABC):
    """
    Common interface of the Caesar and Vigenère engines.

    Subclasses encrypt and decrypt with a known key, break the cipher from
    the ciphertext alone (attempt_decrypt), and describe a decryption in
    plain words. Scoring defaults to chi-squared against English.
    """

    name: str
    cipher_type: CipherType
    cipher_family: CipherFamily
    description: str

    @abstractmethod
    def attempt_decrypt(
        self,
        ciphertext: str,
        options: dict[str, Any],
    ) -> list[PlaintextCandidate]:
        """
        Recover candidate keys without knowing the key.

        Args:
            ciphertext: Raw ciphertext; non-letters pass through
            options: Engine-specific knobs (e.g. ``key_length``, ``top``)

        Returns:
            Candidates ordered best first; empty when there is nothing to break
        """

    @abstractmethod
    def decrypt_with_key(self, ciphertext: str, key: str) -> DecryptionResult:
        """Decrypt with a known key; raises InvalidKeyError on a malformed key."""

    def find_key_and_decrypt(
        self,
        ciphertext: str,
        options: dict[str, Any],
    ) -> DecryptionResult:
        """Break the ciphertext and return the best candidate."""
        candidates = self.attempt_decrypt(ciphertext, options)

        if not candidates:
            raise AnalysisError(
                "Ciphertext contains no letters to analyze",
                {"cipher_type": self.cipher_type.value},
            )

        best = candidates[0]
        return DecryptionResult(
            plaintext=best.plaintext,
            key=best.key,
            confidence=best.confidence,
            explanation=self.explain(ciphertext, best.plaintext, best.key),
        )

    @abstractmethod
    def encrypt(self, plaintext: str, key: str) -> str:
        pass

    @abstractmethod
    def generate_random_key(self) -> str:
        pass

    @abstractmethod
    def validate_key(self, key: str) -> bool:
        pass

    def int_option(
        self,
        options: dict[str, Any],
        name: str,
        default: int | None = None,
    ) -> int | None:
        """Read an integer option, accepting numeric strings."""
        value = options.get(name, default)
        if value is None:
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValidationError(
                f"Option '{name}' must be an integer, got {value!r}",
                {"option": name, "value": str(value)},
            )

    def score(self, plaintext: str) -> float:
        """Chi-squared distance from English; lower is better."""
        from app.services.analysis.statistics import StatisticalAnalyzer

        return StatisticalAnalyzer().english_score(plaintext)

    def confidence(self, score: float) -> float:
        """Map a chi-squared score onto [0, 1]."""
        return max(0.0, min(1.0, 1.0 - score / CONFIDENCE_CEILING))

    @abstractmethod
    def explain(self, ciphertext: str, plaintext: str, key: str) -> str:
        """Describe how the key turns the ciphertext into the plaintext."""
