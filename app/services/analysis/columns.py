from app.core.exceptions import InvalidKeyLengthError


def validate_key_length(key_length: int, max_length: int) -> int:
    """Fail fast on a key length outside [1, max_length]."""
    if key_length < 1 or key_length > max_length:
        raise InvalidKeyLengthError(key_length, max_length)
    return key_length


def split_columns(text: str, key_length: int) -> tuple[str, ...]:
    """
    Partition text into ``key_length`` residue-class columns.

    Column r holds the characters at offsets i with i % key_length == r, in
    increasing i. Columns are empty only when key_length exceeds the text.
    """
    if key_length < 1:
        raise InvalidKeyLengthError(key_length)
    return tuple(text[r::key_length] for r in range(key_length))


def interleave_columns(columns: tuple[str, ...] | list[str]) -> str:
    """Rebuild the text that ``split_columns`` partitioned."""
    key_length = len(columns)
    total = sum(len(column) for column in columns)
    return "".join(columns[i % key_length][i // key_length] for i in range(total))
