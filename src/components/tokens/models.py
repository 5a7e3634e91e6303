"""
Tokens component - Data models.

The payload is a fixed-shape record; anything else is rejected on decode.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, StrictInt, StrictStr, model_validator

SubjectId = int | str


# --- Claims ---


class TokenClaims(BaseModel):
    """Signed payload: subject, auxiliary claim, issued-at and expiry (epoch seconds)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    sub: StrictInt | StrictStr
    email: StrictStr
    iat: StrictInt
    exp: StrictInt

    @model_validator(mode="after")
    def check_expiry_after_issue(self) -> TokenClaims:
        if self.exp < self.iat:
            raise ValueError("exp must not precede iat")
        return self


@dataclass(frozen=True)
class VerifiedIdentity:
    """What a valid token proves about its bearer."""

    subject_id: SubjectId
    aux_claim: str


# --- Errors ---


class TokenError(Exception):
    """Base class for token verification failures."""

    reason = "invalid_token"


class MalformedTokenError(TokenError):
    reason = "malformed"


class InvalidSignatureError(TokenError):
    reason = "invalid_signature"


class ExpiredTokenError(TokenError):
    reason = "expired"


# --- Input / Output Models ---


@dataclass(frozen=True)
class IssueTokenInput:
    subject_id: SubjectId
    aux_claim: str


@dataclass(frozen=True)
class VerifyTokenInput:
    token: str


@dataclass
class TokenOutput:
    token: str | None = None
    success: bool = False


@dataclass
class VerifyTokenOutput:
    identity: VerifiedIdentity | None = None
    error: TokenError | None = None
    success: bool = False
