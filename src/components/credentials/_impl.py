"""
CredentialHasher - Password hashing and verification.

Two schemes are supported:
- sha256: unsalted hex digest, deterministic (legacy stored digests)
- argon2: salted and deliberately slow (default for new digests)

With argon2 selected, sha256 digests still verify and are reported by
needs_rehash() so callers can upgrade them on the next successful login.

Functional Core - pure over its inputs.
"""

from __future__ import annotations

from functools import cached_property
from typing import Literal

from passlib.context import CryptContext

HashScheme = Literal["argon2", "sha256"]

_PASSLIB_SCHEMES: dict[str, str] = {
    "argon2": "argon2",
    "sha256": "hex_sha256",
}

_DUMMY_PLAINTEXT = "tradelog-dummy-credential"


class CredentialHasher:
    """Hash and verify passwords with a passlib CryptContext."""

    def __init__(self, scheme: HashScheme = "argon2") -> None:
        if scheme not in _PASSLIB_SCHEMES:
            raise ValueError(f"Unsupported password hashing scheme: {scheme}")

        self.scheme = scheme
        if scheme == "argon2":
            schemes = ["argon2", "hex_sha256"]
        else:
            schemes = ["hex_sha256"]

        # "auto" deprecates every scheme except the default (the first one)
        self._context = CryptContext(schemes=schemes, deprecated="auto")

    def hash(self, plaintext: str) -> str:
        result: str = self._context.hash(plaintext)
        return result

    def verify(self, plaintext: str, digest: str) -> bool:
        """
        Check plaintext against a stored digest.

        Unrecognised or malformed digests verify as False.
        """
        if not digest:
            return False
        try:
            result: bool = self._context.verify(plaintext, digest)
        except ValueError:
            return False
        return result

    def needs_rehash(self, digest: str) -> bool:
        try:
            result: bool = self._context.needs_update(digest)
        except ValueError:
            return False
        return result

    @cached_property
    def dummy_digest(self) -> str:
        """Digest checked against when the identity is unknown, to even out timing."""
        return self.hash(_DUMMY_PLAINTEXT)
