"""
Auth component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from src.components.tokens import VerifiedIdentity
from src.domain.entities import User

AuthErrorKind = Literal["validation", "conflict", "invalid_credentials", "unauthorized"]


@dataclass(frozen=True)
class AuthError:
    """Auth failure. Messages are safe to show to the caller."""

    kind: AuthErrorKind
    code: str
    message: str
    field: str | None = None


@dataclass
class RegisterInput:
    email: str
    username: str
    password: str


@dataclass
class LoginInput:
    email: str
    password: str


@dataclass
class AuthenticateInput:
    token: str


@dataclass
class AuthOutput:
    user: User | None = None
    token: str | None = None
    identity: VerifiedIdentity | None = None
    errors: list[AuthError] = field(default_factory=list)
    success: bool = False
