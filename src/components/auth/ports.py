"""
Auth component - Port interfaces.
"""

from typing import Protocol

from src.components.tokens import SubjectId, VerifiedIdentity
from src.domain.entities import User


class UserStorePort(Protocol):
    def find_by_identifier(self, identifier: str) -> User | None:
        """Look up a user by email or username."""
        ...

    def insert(self, email: str, username: str, password_hash: str) -> User:
        """Create a user. Raises DuplicateIdentityError when email or username is taken."""
        ...

    def update_password_hash(self, user_id: int, password_hash: str) -> None: ...


class HasherPort(Protocol):
    @property
    def dummy_digest(self) -> str: ...

    def hash(self, plaintext: str) -> str: ...
    def verify(self, plaintext: str, digest: str) -> bool: ...
    def needs_rehash(self, digest: str) -> bool: ...


class TokenServicePort(Protocol):
    def issue(self, subject_id: SubjectId, aux_claim: str) -> str: ...

    def verify(self, token_text: str) -> VerifiedIdentity:
        """Raises TokenError when the token is malformed, forged or expired."""
        ...


class IdentityRulesPort(Protocol):
    """Validation limits for new identities."""

    def get_password_min_length(self) -> int: ...
    def get_username_length_bounds(self) -> tuple[int, int]: ...
