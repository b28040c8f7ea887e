import string
from dataclasses import dataclass
from typing import ClassVar, Mapping

from app.services.analysis.statistics import ENGLISH_FREQ, chi_squared, letter_frequencies
from app.services.engines.monoalphabetic.caesar import caesar_shift


@dataclass(frozen=True)
class ShiftCandidate:
    """One Caesar shift hypothesis and its distance from English."""

    shift: int
    chi_squared: float

    @property
    def letter(self) -> str:
        return string.ascii_uppercase[self.shift]


def select_best(candidates: list[ShiftCandidate] | tuple[ShiftCandidate, ...]) -> ShiftCandidate:
    """
    Lowest chi-squared wins; the first candidate reaching the minimum is kept.

    Candidates are expected in shift order, so ties resolve to the lower shift.
    """
    best = candidates[0]
    for candidate in candidates[1:]:
        if candidate.chi_squared < best.chi_squared:
            best = candidate
    return best


class CaesarBreaker:
    """
    Breaks a single Caesar-enciphered column by exhaustive search.

    Every shift is undone in turn and the resulting letter distribution is
    compared with English using chi-squared. An empty column scores the same
    under every shift and so resolves to shift 0 ('A'), a low-confidence
    answer rather than an error.
    """

    SHIFTS: ClassVar[range] = range(26)

    def __init__(self, reference: Mapping[str, float] = ENGLISH_FREQ):
        self.reference = reference

    def score_shifts(self, column: str) -> tuple[ShiftCandidate, ...]:
        """Chi-squared of the column decrypted under each shift, in shift order."""
        return tuple(
            ShiftCandidate(
                shift=shift,
                chi_squared=chi_squared(
                    letter_frequencies(caesar_shift(column, -shift)),
                    self.reference,
                ),
            )
            for shift in self.SHIFTS
        )

    def break_column(self, column: str) -> ShiftCandidate:
        """Return the winning shift for the column."""
        return select_best(self.score_shifts(column))
