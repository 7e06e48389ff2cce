"""Fixed-length BLAKE3 digest used for block hashes."""

from __future__ import annotations

from .blake3 import Blake3

HASH_SIZE = 32


def blake3_hash(data: bytes) -> bytes:
    """Return the 32-byte BLAKE3 digest of ``data``."""
    return Blake3().update(data).digest(HASH_SIZE)