import string
import unicodedata
from dataclasses import dataclass, field


@dataclass(frozen=True)
class NormalizedText:
    """Result of text normalization.

    ``text`` only ever contains the uppercase letters A-Z.
    """

    text: str
    original: str
    removed_chars: dict[str, int] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.text)


class TextNormalizer:
    """
    Normalizes text for cryptanalysis.

    Handles:
    - Unicode normalization (NFKC)
    - Case conversion
    - Non-alphabetic character removal
    """

    ALPHABET = string.ascii_uppercase

    def normalize(self, text: str) -> str:
        """
        Normalize text for cryptanalysis.

        Args:
            text: Input text to normalize

        Returns:
            Uppercase letters-only string
        """
        return self.normalize_full(text).text

    def normalize_full(self, text: str) -> NormalizedText:
        """
        Normalize text and return detailed result.

        Args:
            text: Input text to normalize

        Returns:
            NormalizedText with details about the normalization
        """
        removed_chars: dict[str, int] = {}

        # NFKC folds compatibility forms (fullwidth letters etc.) to ASCII
        folded = unicodedata.normalize("NFKC", text)
        normalized = self._filter_chars(folded.upper(), removed_chars)

        return NormalizedText(
            text=normalized,
            original=text,
            removed_chars=removed_chars,
        )

    def _filter_chars(self, text: str, removed_chars: dict[str, int]) -> str:
        """Filter text to the alphabet, tracking removed characters."""
        result = []
        allowed_set = set(self.ALPHABET)

        for char in text:
            if char in allowed_set:
                result.append(char)
            else:
                removed_chars[char] = removed_chars.get(char, 0) + 1

        return "".join(result)
