"""
Attack pipeline for Vigenère ciphertexts.

Combines the Kasiski examination, Index of Coincidence key-length scoring and
per-column chi-squared Caesar breaking into a single ciphertext-only attack.
"""

from app.services.pipeline.orchestrator import AttackResult, VigenereAttack

__all__ = [
    "AttackResult",
    "VigenereAttack",
]
