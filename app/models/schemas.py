from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Enums
# ============================================================================


class CipherFamily(str, Enum):
    """Supported cipher families."""

    MONOALPHABETIC = "monoalphabetic"
    POLYALPHABETIC = "polyalphabetic"


class CipherType(str, Enum):
    """Specific cipher types."""

    CAESAR = "caesar"
    VIGENERE = "vigenere"


# ============================================================================
# Statistics Schemas
# ============================================================================


class FrequencyData(BaseModel):
    """Character frequency data."""

    character: str
    count: int
    frequency: float = Field(ge=0.0, le=1.0)


class StatisticsProfile(BaseModel):
    """Statistical profile of the normalized ciphertext."""

    model_config = ConfigDict(from_attributes=True)

    length: int
    unique_chars: int
    character_frequencies: list[FrequencyData]
    index_of_coincidence: float
    chi_squared: float | None = None


class RepetitionData(BaseModel):
    """A repeated n-gram found by the Kasiski examination."""

    model_config = ConfigDict(from_attributes=True)

    sequence: str
    positions: list[int]
    distances: list[int]


class KasiskiData(BaseModel):
    """Kasiski examination summary."""

    repetitions: dict[int, list[RepetitionData]]
    distance_count: int
    gcd: int | None
    gcd_by_length: dict[int, int | None]
    common_distances: list[tuple[int, int]]
    common_factors: list[tuple[int, int]]


class KeyLengthScoreData(BaseModel):
    """Average column IC for one candidate key length."""

    model_config = ConfigDict(from_attributes=True)

    key_length: int = Field(ge=1)
    average_ic: float = Field(ge=0.0, le=1.0)
    likely: bool


class ColumnBreakData(BaseModel):
    """Winning shift for one column of the ciphertext."""

    column_index: int
    length: int
    shift: int = Field(ge=0, le=25)
    letter: str
    chi_squared: float


# ============================================================================
# Decryption Schemas
# ============================================================================


class PlaintextCandidate(BaseModel):
    """A candidate plaintext with scoring."""

    plaintext: str
    score: float
    confidence: float = Field(ge=0.0, le=1.0)
    cipher_type: CipherType
    key: str
    method: str


# ============================================================================
# Request Schemas
# ============================================================================


class AnalyzeRequest(BaseModel):
    """Request schema for /analyze endpoint."""

    ciphertext: str = Field(min_length=1, max_length=100_000)
    key_length: int | None = Field(default=None, description="Force this key length")
    max_key_length: int | None = Field(default=None, description="Largest key length tested")


class DecryptOptions(BaseModel):
    """Tuning knobs for breaking a ciphertext without a key."""

    model_config = ConfigDict(extra="forbid")

    key_length: int | None = Field(default=None, description="Force this key length")
    max_key_length: int | None = Field(default=None, description="Largest key length tested")
    top: int = Field(default=5, ge=1, description="Caesar candidates returned")
    alternatives: int = Field(default=3, ge=0, description="Extra Vigenère key lengths tried")


class DecryptRequest(BaseModel):
    """Request schema for /decrypt endpoint."""

    ciphertext: str = Field(min_length=1, max_length=100_000)
    cipher_type: CipherType
    key: str | None = None
    options: DecryptOptions = Field(default_factory=DecryptOptions)


class EncryptRequest(BaseModel):
    """Request schema for /encrypt endpoint."""

    plaintext: str = Field(min_length=1, max_length=100_000)
    cipher_type: CipherType
    key: str | None = None


# ============================================================================
# Response Schemas
# ============================================================================


class AnalyzeResponse(BaseModel):
    """Response schema for /analyze endpoint."""

    id: int | None = None
    statistics: StatisticsProfile
    kasiski: KasiskiData
    key_length_scores: list[KeyLengthScoreData]
    best_key_length: int | None
    key_length: int | None
    key: str
    reduced_key: str
    plaintext: str
    columns: list[ColumnBreakData]
    explanations: list[str]


class DecryptResponse(BaseModel):
    """Response schema for /decrypt endpoint."""

    plaintext: str
    confidence: float
    key_used: str
    explanation: str


class EncryptResponse(BaseModel):
    """Response schema for /encrypt endpoint."""

    ciphertext: str
    cipher_type: CipherType
    key_used: str


class AnalysisHistoryItem(BaseModel):
    """Single history item."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    ciphertext_hash: str
    ciphertext_preview: str
    recovered_key: str | None
    key_length: int | None
    created_at: datetime


class HistoryResponse(BaseModel):
    """Response schema for /history endpoint."""

    items: list[AnalysisHistoryItem]
    total: int
    page: int
    page_size: int


class AnalysisDetailResponse(BaseModel):
    """Full analysis detail response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    ciphertext_hash: str
    ciphertext: str
    best_key_length: int | None
    key_length: int | None
    recovered_key: str | None
    reduced_key: str | None
    plaintext: str | None
    key_length_scores: list[dict[str, Any]]
    kasiski: dict[str, Any]
    explanations: list[str]
    created_at: datetime
    updated_at: datetime


# ============================================================================
# Error Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)
