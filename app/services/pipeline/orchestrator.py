"""
Vigenère attack orchestrator.

Sequences the stages of a ciphertext-only attack:
1. Normalize the ciphertext
2. Kasiski examination (repeated n-grams, distances, divisors)
3. Index of Coincidence scoring of every candidate key length
4. Choose a key length (forced, or picked by a selector)
5. Break each column and assemble the key
6. Decrypt the original ciphertext with the recovered key
"""

import logging
from dataclasses import dataclass
from typing import Callable

from app.core.config import Settings, get_settings
from app.services.analysis.coincidence import CoincidenceScorer, KeyLengthScore, best_candidate
from app.services.analysis.columns import validate_key_length
from app.services.analysis.kasiski import KasiskiExaminer, KasiskiReport
from app.services.engines.polyalphabetic.vigenere import vigenere_decrypt
from app.services.optimization.key_assembler import KeyAssembler, RecoveredKey, reduce_repeating_key
from app.services.preprocessing.normalizer import NormalizedText, TextNormalizer

logger = logging.getLogger(__name__)

KeyLengthSelector = Callable[[list[KeyLengthScore]], int]


@dataclass(frozen=True)
class AttackResult:
    """Everything produced by one run of the attack."""

    normalized: NormalizedText
    kasiski: KasiskiReport
    key_length_scores: list[KeyLengthScore]
    best_key_length: int | None
    key_length: int | None
    recovered: RecoveredKey
    reduced_key: str
    plaintext: str

    @property
    def key(self) -> str:
        return self.recovered.key


class VigenereAttack:
    """
    Recovers the key of a Vigenère ciphertext without knowing it.

    The only decision point is the key length. It can be forced per run, or
    delegated to ``selector``, which defaults to the IC-best candidate so
    automated and interactive callers share the same rule.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        selector: KeyLengthSelector = best_candidate,
    ):
        self.settings = settings or get_settings()
        self.selector = selector
        self.normalizer = TextNormalizer()
        self.examiner = KasiskiExaminer(self.settings.ngram_lengths)
        self.scorer = CoincidenceScorer(
            likely_threshold=self.settings.likely_ic_threshold,
            max_key_length=self.settings.max_key_length,
        )
        self.assembler = KeyAssembler(
            max_key_length=self.settings.max_key_length,
            max_workers=self.settings.max_parallel_columns,
        )

    def run(
        self,
        ciphertext: str,
        key_length: int | None = None,
        max_key_length: int | None = None,
    ) -> AttackResult:
        """
        Run the attack.

        Args:
            ciphertext: Raw ciphertext; non-letters are kept in the plaintext
            key_length: Force this key length instead of asking the selector
            max_key_length: Largest key length scored (defaults to settings)

        Returns:
            AttackResult with the analysis, the key and the plaintext
        """
        max_tested = (
            max_key_length if max_key_length is not None
            else self.settings.max_key_length_tested
        )
        validate_key_length(max_tested, self.settings.max_key_length)
        if key_length is not None:
            validate_key_length(key_length, self.settings.max_key_length)

        normalized = self.normalizer.normalize_full(ciphertext)
        text = normalized.text
        logger.info("Attacking %d letters (max key length %d)", len(text), max_tested)

        kasiski = self.examiner.examine(text, max_factor=max_tested)
        scores = self.scorer.score_key_lengths(text, max_tested)
        best = self.selector(scores) if text else None

        chosen = key_length if key_length is not None else best
        if chosen is None:
            recovered = RecoveredKey(key="", columns=())
        else:
            recovered = self.assembler.assemble(text, chosen)

        reduced = reduce_repeating_key(recovered.key)
        plaintext = vigenere_decrypt(ciphertext, reduced) if reduced else ciphertext.upper()

        logger.info("Key length %s (IC best %s), key %r", chosen, best, reduced)

        return AttackResult(
            normalized=normalized,
            kasiski=kasiski,
            key_length_scores=scores,
            best_key_length=best,
            key_length=chosen,
            recovered=recovered,
            reduced_key=reduced,
            plaintext=plaintext,
        )
