import logging
from dataclasses import dataclass

from app.core.exceptions import AnalysisError
from app.services.analysis.columns import split_columns, validate_key_length
from app.services.analysis.statistics import index_of_coincidence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeyLengthScore:
    """Average column IC for one candidate key length."""

    key_length: int
    average_ic: float
    column_ics: tuple[float, ...]
    likely: bool


def best_candidate(scores: list[KeyLengthScore]) -> int:
    """
    Pick the key length with the highest average IC.

    Ties go to the shorter key.
    """
    if not scores:
        raise AnalysisError("No key-length scores to choose from")

    best = min(scores, key=lambda score: (-score.average_ic, score.key_length))
    return best.key_length


class CoincidenceScorer:
    """
    Ranks candidate key lengths by Index of Coincidence.

    For the right key length each column is a plain Caesar cipher and keeps
    an English-like IC (~0.067); wrong lengths mix alphabets and drift
    toward random (~0.038).
    """

    def __init__(self, likely_threshold: float = 0.060, max_key_length: int = 50):
        self.likely_threshold = likely_threshold
        self.max_key_length = max_key_length

    def score_key_lengths(self, ciphertext: str, max_length: int) -> list[KeyLengthScore]:
        """
        Score every key length in [1, max_length].

        Args:
            ciphertext: Normalized ciphertext
            max_length: Largest key length tested

        Returns:
            One KeyLengthScore per key length, in increasing key length
        """
        validate_key_length(max_length, self.max_key_length)

        scores = []
        for key_length in range(1, max_length + 1):
            column_ics = tuple(
                index_of_coincidence(column)
                for column in split_columns(ciphertext, key_length)
            )
            average_ic = sum(column_ics) / key_length

            scores.append(KeyLengthScore(
                key_length=key_length,
                average_ic=average_ic,
                column_ics=column_ics,
                likely=average_ic > self.likely_threshold,
            ))

        logger.debug(
            "IC scores: %s",
            ", ".join(f"{s.key_length}={s.average_ic:.4f}" for s in scores),
        )
        return scores
