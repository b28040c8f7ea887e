"""
Kasiski examination.

Repeated n-grams in a Vigenère ciphertext tend to be the same plaintext
fragment enciphered under the same key alignment, so the distances between
their occurrences are multiples of the key length.
"""

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from functools import reduce

from app.core.exceptions import AnalysisError

logger = logging.getLogger(__name__)

NGramIndex = dict[str, tuple[int, ...]]

DEFAULT_NGRAM_LENGTHS: tuple[int, ...] = (3, 4)


@dataclass(frozen=True)
class Repetition:
    """A repeated n-gram with its offsets and pairwise distances."""

    sequence: str
    positions: tuple[int, ...]
    distances: tuple[int, ...]

    @property
    def count(self) -> int:
        return len(self.positions)


@dataclass(frozen=True)
class KasiskiReport:
    """Everything the examination found for one ciphertext."""

    repetitions: dict[int, tuple[Repetition, ...]]
    distances: tuple[int, ...]
    distance_frequencies: tuple[tuple[int, int], ...]
    factor_frequencies: tuple[tuple[int, int], ...]
    gcd: int | None
    gcd_by_length: dict[int, int | None] = field(default_factory=dict)

    @property
    def likely_key_lengths(self) -> list[int]:
        """Divisors ordered from most to least supported."""
        return [factor for factor, _ in self.factor_frequencies]


def build_ngram_index(text: str, n: int) -> NGramIndex:
    """
    Map every repeated length-``n`` substring to its start offsets.

    Offsets are ascending. Substrings that occur only once are dropped, and a
    text shorter than ``n`` yields an empty index.
    """
    if n < 1:
        raise AnalysisError(f"N-gram length must be positive, got {n}", {"n": n})

    seen: dict[str, list[int]] = {}
    for i in range(len(text) - n + 1):
        seen.setdefault(text[i:i + n], []).append(i)

    return {
        ngram: tuple(positions)
        for ngram, positions in seen.items()
        if len(positions) >= 2
    }


def pairwise_distances(positions: tuple[int, ...] | list[int]) -> list[int]:
    """
    Distances between every pair of offsets, later minus earlier.

    Offsets [5, 12, 33] give [7, 28, 21].
    """
    return [
        positions[j] - positions[i]
        for i in range(len(positions))
        for j in range(i + 1, len(positions))
    ]


def collect_distances(index: NGramIndex) -> list[int]:
    """Concatenate the pairwise distances of every entry in the index."""
    distances: list[int] = []
    for positions in index.values():
        distances.extend(pairwise_distances(positions))
    return distances


def distance_frequencies(distances: list[int]) -> list[tuple[int, int]]:
    """(distance, occurrences) pairs, most common first, ties by distance."""
    counter = Counter(distances)
    return sorted(counter.items(), key=lambda item: (-item[1], item[0]))


def factor_frequencies(distances: list[int], max_factor: int) -> list[tuple[int, int]]:
    """
    How many distances each divisor in [2, max_factor] divides.

    Returned as (factor, count) pairs, best supported first; factors that
    divide nothing are omitted.
    """
    counter: Counter[int] = Counter()
    for distance in distances:
        for factor in range(2, min(distance, max_factor) + 1):
            if distance % factor == 0:
                counter[factor] += 1
    return sorted(counter.items(), key=lambda item: (-item[1], item[0]))


def gcd_of_distances(distances: list[int]) -> int | None:
    """GCD of all distances, or None when there are none."""
    if not distances:
        return None
    return reduce(math.gcd, distances)


class KasiskiExaminer:
    """
    Runs the Kasiski examination over several n-gram lengths.

    Trigrams are more common but less reliable, tetragrams rarer but more
    trustworthy; both feed one aggregated distance set.
    """

    def __init__(self, ngram_lengths: tuple[int, ...] = DEFAULT_NGRAM_LENGTHS):
        self.ngram_lengths = tuple(ngram_lengths)

    def examine(self, text: str, max_factor: int = 15) -> KasiskiReport:
        """
        Examine normalized ciphertext.

        Args:
            text: Uppercase letters-only ciphertext
            max_factor: Largest divisor considered as a key-length hint

        Returns:
            KasiskiReport with repetitions, distances and divisor ranking
        """
        repetitions: dict[int, tuple[Repetition, ...]] = {}
        gcd_by_length: dict[int, int | None] = {}
        all_distances: list[int] = []

        for n in self.ngram_lengths:
            index = build_ngram_index(text, n)
            found = tuple(
                Repetition(
                    sequence=ngram,
                    positions=positions,
                    distances=tuple(pairwise_distances(positions)),
                )
                for ngram, positions in index.items()
            )
            distances = [d for rep in found for d in rep.distances]

            repetitions[n] = found
            gcd_by_length[n] = gcd_of_distances(distances)
            all_distances.extend(distances)

            logger.debug("%d repeated %d-grams, %d distances", len(found), n, len(distances))

        report = KasiskiReport(
            repetitions=repetitions,
            distances=tuple(all_distances),
            distance_frequencies=tuple(distance_frequencies(all_distances)),
            factor_frequencies=tuple(factor_frequencies(all_distances, max_factor)),
            gcd=gcd_of_distances(all_distances),
            gcd_by_length=gcd_by_length,
        )

        logger.info(
            "Kasiski: %d distances, gcd=%s, top factors=%s",
            len(all_distances),
            report.gcd,
            report.likely_key_lengths[:3],
        )
        return report
