import random
import string
from typing import Any, ClassVar

from app.core.exceptions import InvalidKeyError
from app.models.schemas import CipherFamily, CipherType, PlaintextCandidate
from app.services.engines.base import CipherEngine, DecryptionResult
from app.services.engines.registry import EngineRegistry

ALPHABET = string.ascii_uppercase


def _vigenere_process(text: str, key: str, direction: int) -> str:
    """
    Shift each letter by the matching key letter, +1 to encrypt, -1 to decrypt.

    The key position only advances on letters; anything else passes through.
    """
    shifts = [ALPHABET.index(c) for c in key.upper()]
    result = []
    key_idx = 0

    for char in text.upper():
        if char in ALPHABET:
            shift = shifts[key_idx % len(shifts)]
            result.append(ALPHABET[(ALPHABET.index(char) + direction * shift) % 26])
            key_idx += 1
        else:
            result.append(char)

    return "".join(result)


def vigenere_encrypt(plaintext: str, key: str) -> str:
    """Encrypt using Vigenère cipher."""
    return _vigenere_process(plaintext, key, 1)


def vigenere_decrypt(ciphertext: str, key: str) -> str:
    """Decrypt using Vigenère cipher."""
    return _vigenere_process(ciphertext, key, -1)


@EngineRegistry.register
class VigenereEngine(CipherEngine):
    """
    Vigenère cipher engine.

    A polyalphabetic substitution cipher that uses a keyword to determine
    the shift for each letter. Each letter of the keyword represents a
    different Caesar shift applied in sequence.

    Breaking involves:
    1. Finding key length using Kasiski examination and IOC analysis
    2. Breaking each Caesar cipher independently
    """

    name = "Vigenère Cipher"
    cipher_type = CipherType.VIGENERE
    cipher_family = CipherFamily.POLYALPHABETIC
    description = (
        "A polyalphabetic cipher where each letter is shifted by a different amount "
        "based on a repeating keyword. More secure than Caesar but vulnerable to "
        "Kasiski examination and frequency analysis per key position."
    )

    ALPHABET: ClassVar[str] = ALPHABET

    def attempt_decrypt(
        self,
        ciphertext: str,
        options: dict[str, Any],
    ) -> list[PlaintextCandidate]:
        """
        Attempt to break Vigenère cipher.

        1. Run the attack with the IC-best (or forced) key length
        2. Also try the next best key lengths by IC, favouring Kasiski divisors
        3. Score every distinct key by chi-squared of its plaintext
        """
        from app.services.pipeline.orchestrator import VigenereAttack

        key_length = self.int_option(options, "key_length")
        alternatives = self.int_option(options, "alternatives", 3)

        attack = VigenereAttack()
        result = attack.run(
            ciphertext,
            key_length=key_length,
            max_key_length=self.int_option(options, "max_key_length"),
        )
        if not result.reduced_key:
            return []

        keys = [(result.reduced_key, "kasiski_ic_chi_squared")]
        if key_length is None:
            for length in self._rank_key_lengths(result)[:alternatives]:
                if length == result.key_length:
                    continue
                recovered = attack.assembler.assemble(result.normalized.text, length)
                keys.append((recovered.key, f"ic_rank_length_{length}"))

        candidates = []
        seen = set()
        for key, method in keys:
            if key in seen:
                continue
            seen.add(key)

            plaintext = vigenere_decrypt(ciphertext, key)
            score = self.score(plaintext)
            candidates.append(PlaintextCandidate(
                plaintext=plaintext,
                score=score,
                confidence=self.confidence(score),
                cipher_type=self.cipher_type,
                key=key,
                method=method,
            ))

        # Stable sort keeps the primary attack first among equal scores
        candidates.sort(key=lambda x: x.score)
        return candidates

    def decrypt_with_key(self, ciphertext: str, key: str) -> DecryptionResult:
        """Decrypt with a known keyword."""
        key_str = self._parse_key(key)

        plaintext = vigenere_decrypt(ciphertext, key_str)

        return DecryptionResult(
            plaintext=plaintext,
            key=key_str,
            confidence=1.0,
            explanation=self.explain(ciphertext, plaintext, key_str),
        )

    def encrypt(self, plaintext: str, key: str) -> str:
        """Encrypt using the keyword."""
        return vigenere_encrypt(plaintext, self._parse_key(key))

    def generate_random_key(self) -> str:
        """Generate a random keyword."""
        length = random.randint(4, 10)
        return "".join(random.choice(self.ALPHABET) for _ in range(length))

    def validate_key(self, key: str) -> bool:
        """Validate that key is alphabetic."""
        try:
            self._parse_key(key)
            return True
        except InvalidKeyError:
            return False

    def explain(self, ciphertext: str, plaintext: str, key: str) -> str:
        """Generate human-readable explanation."""
        key_str = self._parse_key(key)

        shifts = [self.ALPHABET.index(c) for c in key_str]
        shift_desc = ", ".join(f"{key_str[i]}={shifts[i]}" for i in range(len(key_str)))

        return (
            f"Vigenère cipher with keyword '{key_str}' (length {len(key_str)}). "
            f"Letter shifts: {shift_desc}. "
            f"Each letter of the ciphertext is shifted back by the corresponding "
            f"key letter's position in the alphabet."
        )

    def _parse_key(self, key: str) -> str:
        """Parse and validate the keyword."""
        key_str = str(key).strip().upper()
        if not key_str or any(c not in self.ALPHABET for c in key_str):
            raise InvalidKeyError(
                "Invalid key: must be a non-empty alphabetic keyword",
                {"key": key},
            )
        return key_str

    def _rank_key_lengths(self, result) -> list[int]:
        """
        Key lengths by descending IC, with Kasiski divisors moved to the front.

        For each potential key length, the average IOC of each "column"
        (every nth letter) is higher for the correct length; repeated
        sequence distances independently favour its divisors.
        """
        by_ic = sorted(
            result.key_length_scores,
            key=lambda score: (-score.average_ic, score.key_length),
        )
        kasiski_lengths = set(result.kasiski.likely_key_lengths[:3])

        ranked = []
        for score in by_ic:
            if score.key_length in kasiski_lengths and score.likely:
                ranked.insert(0, score.key_length)
            else:
                ranked.append(score.key_length)
        return ranked
