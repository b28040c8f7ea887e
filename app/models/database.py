from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


class Analysis(Base):
    """Stores attack history and results."""

    __tablename__ = "analyses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ciphertext_hash: Mapped[str] = mapped_column(String(64), index=True)
    ciphertext: Mapped[str] = mapped_column(Text)

    # Key length analysis
    best_key_length: Mapped[int | None] = mapped_column(Integer, nullable=True)
    key_length: Mapped[int | None] = mapped_column(Integer, nullable=True)
    key_length_scores: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    kasiski: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)

    # Key recovery results
    recovered_key: Mapped[str | None] = mapped_column(String(64), nullable=True)
    reduced_key: Mapped[str | None] = mapped_column(String(64), nullable=True)
    plaintext: Mapped[str | None] = mapped_column(Text, nullable=True)

    explanations: Mapped[list[str]] = mapped_column(JSON, default=list)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )
