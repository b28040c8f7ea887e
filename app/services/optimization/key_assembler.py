import concurrent.futures
import logging
from dataclasses import dataclass

from app.services.analysis.columns import split_columns, validate_key_length
from app.services.optimization.shift_search import CaesarBreaker, ShiftCandidate, select_best

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnBreak:
    """Outcome of breaking one column."""

    column_index: int
    column: str
    best: ShiftCandidate
    candidates: tuple[ShiftCandidate, ...]


@dataclass(frozen=True)
class RecoveredKey:
    """Key letters in column order, with the per-column evidence."""

    key: str
    columns: tuple[ColumnBreak, ...]

    @property
    def key_length(self) -> int:
        return len(self.key)


def reduce_repeating_key(key: str) -> str:
    """
    If a key is a perfect repetition of a shorter pattern, reduce it.

    Example: LEMONLEMON -> LEMON
    """
    for period in range(1, len(key) // 2 + 1):
        if len(key) % period != 0:
            continue
        if key[:period] * (len(key) // period) == key:
            return key[:period]
    return key


class KeyAssembler:
    """
    Recovers a Vigenère key one column at a time.

    Columns are independent Caesar ciphers, so with ``max_workers > 1`` they
    are broken on a thread pool. Results are placed by column index and the
    key order never depends on completion order.
    """

    def __init__(
        self,
        breaker: CaesarBreaker | None = None,
        max_key_length: int = 50,
        max_workers: int = 1,
    ):
        self.breaker = breaker or CaesarBreaker()
        self.max_key_length = max_key_length
        self.max_workers = max_workers

    def assemble(self, ciphertext: str, key_length: int) -> RecoveredKey:
        """
        Break every column of ciphertext for the given key length.

        Args:
            ciphertext: Normalized ciphertext
            key_length: Assumed key length

        Returns:
            RecoveredKey; empty when the ciphertext is empty
        """
        validate_key_length(key_length, self.max_key_length)

        if not ciphertext:
            return RecoveredKey(key="", columns=())

        columns = split_columns(ciphertext, key_length)
        results: list[ColumnBreak | None] = [None] * key_length

        if self.max_workers > 1 and key_length > 1:
            with concurrent.futures.ThreadPoolExecutor(max_workers=self.max_workers) as ex:
                futs = {
                    ex.submit(self._break, index, column): index
                    for index, column in enumerate(columns)
                }
                for fut in concurrent.futures.as_completed(futs):
                    results[futs[fut]] = fut.result()
        else:
            for index, column in enumerate(columns):
                results[index] = self._break(index, column)

        key = "".join(result.best.letter for result in results)
        logger.info("Recovered key %s for key length %d", key, key_length)

        return RecoveredKey(key=key, columns=tuple(results))

    def _break(self, index: int, column: str) -> ColumnBreak:
        candidates = self.breaker.score_shifts(column)
        best = select_best(candidates)

        logger.debug(
            "Column %d (%d letters) -> %s (chi2=%.2f)",
            index, len(column), best.letter, best.chi_squared,
        )
        return ColumnBreak(
            column_index=index,
            column=column,
            best=best,
            candidates=candidates,
        )
