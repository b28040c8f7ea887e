from typing import Any


class CryptanalysisError(Exception):
    """Base exception for all cryptanalysis errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(CryptanalysisError):
    """Raised when input validation fails."""

    pass


class CiphertextTooLongError(ValidationError):
    """Raised when ciphertext exceeds maximum length."""

    def __init__(self, length: int, max_length: int):
        super().__init__(
            f"Ciphertext length {length} exceeds maximum {max_length}",
            {"length": length, "max_length": max_length},
        )


class InvalidKeyLengthError(ValidationError):
    """Raised when a key length is non-positive or above the configured bound."""

    def __init__(self, key_length: int, max_length: int | None = None):
        if max_length is None:
            message = f"Key length {key_length} must be positive"
        else:
            message = f"Key length {key_length} is outside the valid range 1..{max_length}"
        super().__init__(
            message,
            {"key_length": key_length, "max_length": max_length},
        )


class InvalidKeyError(ValidationError):
    """Raised when a cipher key is malformed."""

    pass


class EngineError(CryptanalysisError):
    """Base exception for cipher engine errors."""

    pass


class EngineNotFoundError(EngineError):
    """Raised when requested cipher engine is not found."""

    def __init__(self, engine_name: str):
        super().__init__(
            f"Cipher engine '{engine_name}' not found",
            {"engine_name": engine_name},
        )


class AnalysisError(CryptanalysisError):
    """Raised when statistical analysis cannot be performed."""

    pass
