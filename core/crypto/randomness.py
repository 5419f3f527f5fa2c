"""
Module 02 - Random Sources
Explicit randomness handles for nonces and transaction-scoped unique values.

Owner: Protocol/Crypto Engineer
Module ID: M02

Every operation that draws entropy takes a RandomSource instead of reaching
for a global generator, so tests can swap in a DeterministicRandomSource and
pin exact digests.

Sources:
- SecureRandomSource: OS CSPRNG via the secrets module (default)
- DeterministicRandomSource: SHA-256 counter-mode stream from a seed

Both are safe to share between threads.
"""
from __future__ import annotations

import secrets
import threading
import uuid
from typing import Protocol, runtime_checkable

from core.crypto.hashing import hash_parts


# Size of a commitment/proof nonce in bytes
NONCE_SIZE: int = 32


@runtime_checkable
class RandomSource(Protocol):
    """Anything that can produce random bytes."""

    def random_bytes(self, length: int) -> bytes:
        ...


class SecureRandomSource:
    """Random source backed by the operating system CSPRNG."""

    def random_bytes(self, length: int) -> bytes:
        return secrets.token_bytes(length)

    def __repr__(self) -> str:
        return "SecureRandomSource()"


class DeterministicRandomSource:
    """
    Reproducible random source for tests and replays.

    Output block i is sha256(seed || i_le8). Draws are serialized by a lock
    so concurrent callers never receive overlapping bytes.

    NOT FOR PRODUCTION: anyone who knows the seed can predict every nonce.
    """

    def __init__(self, seed: bytes | str | int = b"") -> None:
        if isinstance(seed, int):
            seed = seed.to_bytes(8, "little", signed=False)
        elif isinstance(seed, str):
            seed = seed.encode("utf-8")
        self._seed = seed
        self._counter = 0
        self._buffer = b""
        self._lock = threading.Lock()

    def random_bytes(self, length: int) -> bytes:
        if length < 0:
            raise ValueError(f"length must be non-negative, got {length}")
        with self._lock:
            while len(self._buffer) < length:
                block = hash_parts(self._seed, self._counter.to_bytes(8, "little"))
                self._buffer += block
                self._counter += 1
            out, self._buffer = self._buffer[:length], self._buffer[length:]
        return out

    def __repr__(self) -> str:
        return f"DeterministicRandomSource(seed={self._seed!r})"


_default_source: RandomSource = SecureRandomSource()


def get_default_source() -> RandomSource:
    """Get the process-wide default random source."""
    return _default_source


def set_default_source(source: RandomSource) -> None:
    """Set the process-wide default random source."""
    global _default_source
    _default_source = source


def resolve_source(rng: RandomSource | None) -> RandomSource:
    """Return rng, or the default source when rng is None."""
    return rng if rng is not None else _default_source


def generate_nonce(rng: RandomSource | None = None) -> bytes:
    """Draw a fresh 32-byte nonce."""
    return resolve_source(rng).random_bytes(NONCE_SIZE)


def generate_unique_id(rng: RandomSource | None = None) -> bytes:
    """
    Draw a 16-byte random (version 4) UUID.

    Returns the raw UUID bytes, which are mixed into transaction ids.
    """
    return uuid.UUID(bytes=resolve_source(rng).random_bytes(16), version=4).bytes


__all__ = [
    "NONCE_SIZE",
    "RandomSource",
    "SecureRandomSource",
    "DeterministicRandomSource",
    "get_default_source",
    "set_default_source",
    "resolve_source",
    "generate_nonce",
    "generate_unique_id",
]
