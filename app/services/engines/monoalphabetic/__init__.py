"""Monoalphabetic cipher engines."""

from app.services.engines.monoalphabetic.caesar import CaesarEngine

__all__ = [
    "CaesarEngine",
]
