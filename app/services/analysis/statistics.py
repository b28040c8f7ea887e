import string
from collections import Counter
from types import MappingProxyType
from typing import ClassVar, Mapping

from app.models.schemas import FrequencyData, StatisticsProfile

ALPHABET = string.ascii_uppercase

# English letter frequencies (percentages, A-Z). Every entry is strictly
# positive, so chi-squared never divides by zero against this table.
ENGLISH_FREQ: Mapping[str, float] = MappingProxyType({
    "A": 8.2, "B": 1.5, "C": 2.8, "D": 4.3, "E": 13.0, "F": 2.2,
    "G": 2.0, "H": 6.1, "I": 7.0, "J": 0.15, "K": 0.77, "L": 4.0,
    "M": 2.4, "N": 6.7, "O": 7.5, "P": 1.9, "Q": 0.095, "R": 6.0,
    "S": 6.3, "T": 9.1, "U": 2.8, "V": 0.98, "W": 2.4, "X": 0.15,
    "Y": 2.0, "Z": 0.074,
})

ENGLISH_IOC = 0.0667
RANDOM_IOC = 0.0385


def letter_counts(text: str) -> list[int]:
    """Count each letter A-Z; anything else is ignored."""
    counts = [0] * 26
    for char in text:
        if char in ALPHABET:
            counts[ord(char) - 65] += 1
    return counts


def letter_frequencies(text: str) -> tuple[float, ...]:
    """
    Letter frequency vector as percentages (0-100), in A-Z order.

    A text without letters yields a vector of zeros.
    """
    counts = letter_counts(text)
    total = sum(counts)

    if total == 0:
        return (0.0,) * 26

    return tuple(count * 100.0 / total for count in counts)


def chi_squared(
    observed: tuple[float, ...],
    expected: Mapping[str, float] = ENGLISH_FREQ,
) -> float:
    """
    Chi-squared distance between two percentage vectors.

    Lower values indicate closer match to the expected distribution.
    """
    total = 0.0
    for letter, observed_pct in zip(ALPHABET, observed):
        expected_pct = expected[letter]
        if expected_pct > 0:
            diff = observed_pct - expected_pct
            total += (diff * diff) / expected_pct
    return total


def index_of_coincidence(text: str) -> float:
    """
    Calculate Index of Coincidence.

    IOC measures how likely two randomly chosen letters are the same.
    - English text: ~0.0667
    - Random text: ~0.0385 (1/26)

    Texts with fewer than two letters score 0.
    """
    counts = letter_counts(text)
    n = sum(counts)
    if n < 2:
        return 0.0

    numerator = sum(f * (f - 1) for f in counts)
    return numerator / (n * (n - 1))


class StatisticalAnalyzer:
    """
    Statistical profile of a ciphertext.

    Computes the figures reported alongside an attack:
    - Character frequencies
    - Index of Coincidence (IOC)
    - Chi-squared against English
    """

    ALPHABET: ClassVar[str] = ALPHABET

    def analyze(self, text: str) -> StatisticsProfile:
        """
        Perform statistical analysis on text.

        Args:
            text: Normalized ciphertext (uppercase letters only)

        Returns:
            StatisticsProfile with all computed statistics
        """
        filtered = "".join(c for c in text.upper() if c in self.ALPHABET)

        if not filtered:
            return StatisticsProfile(
                length=0,
                unique_chars=0,
                character_frequencies=[],
                index_of_coincidence=0.0,
                chi_squared=None,
            )

        return StatisticsProfile(
            length=len(filtered),
            unique_chars=len(set(filtered)),
            character_frequencies=self._character_frequencies(filtered),
            index_of_coincidence=index_of_coincidence(filtered),
            chi_squared=self.english_score(filtered),
        )

    def _character_frequencies(self, text: str) -> list[FrequencyData]:
        """Calculate character frequencies, most frequent first."""
        counter = Counter(text)
        total = len(text)

        result = [
            FrequencyData(
                character=char,
                count=counter.get(char, 0),
                frequency=counter.get(char, 0) / total,
            )
            for char in self.ALPHABET
        ]

        result.sort(key=lambda x: x.frequency, reverse=True)
        return result

    def english_score(self, text: str) -> float:
        """
        Score text based on how well it matches English frequencies.

        Lower score = better match to English.
        """
        return chi_squared(letter_frequencies(text))
