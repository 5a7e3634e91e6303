"""
Credentials component - Password digests.

One-way hashing of plaintext passwords and constant-time verification
against stored digests.
"""

from ._impl import CredentialHasher, HashScheme

__all__ = [
    "CredentialHasher",
    "HashScheme",
]
