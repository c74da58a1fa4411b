"""Deterministic hashing used to fingerprint navigation policies."""

from __future__ import annotations

import hashlib
from collections.abc import Iterable

_HASH_TRUNCATION = 12


def stable_hash(payload: str) -> str:
    """Deterministic SHA-256 of *payload*, truncated to 12 hex chars.

    Args:
        payload: Arbitrary string to hash.

    Returns:
        First 12 hexadecimal characters of the SHA-256 digest.
    """
    digest = hashlib.sha256(payload.encode("utf-8")).hexdigest()
    return digest[:_HASH_TRUNCATION]


def stable_hash_of(parts: Iterable[str]) -> str:
    """Hash an iterable of strings independently of how they are chunked.

    Each part is length-prefixed before joining so that ``["ab", "c"]`` and
    ``["a", "bc"]`` produce different digests.
    """
    return stable_hash("".join(f"{len(p)}:{p};" for p in parts))
