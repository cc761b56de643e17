"""
Hashing utilities.

Provides the digest helpers used to derive stable finding fingerprints,
ensuring a single algorithm and encoding across the auditor.
"""

from __future__ import annotations

import hashlib
from typing import Iterable


def sha256_hex(material: str) -> str:
    return hashlib.sha256(material.encode("utf-8")).hexdigest()


def stable_suffix(parts: Iterable[str], length: int = 12) -> str:
    """
    Deterministic short digest of the joined identity parts.
    """
    return sha256_hex("|".join(parts))[:length]
