"""
Tokens component - Signed, time-bounded bearer tokens.

Issue a token for an authenticated identity; verify a presented token's
signature and expiry.
"""

from ._impl import ALGORITHM, TOKEN_LIFETIME, TOKEN_TYPE, TokenService
from .component import run_issue, run_verify
from .models import (
    ExpiredTokenError,
    InvalidSignatureError,
    IssueTokenInput,
    MalformedTokenError,
    SubjectId,
    TokenClaims,
    TokenError,
    TokenOutput,
    VerifiedIdentity,
    VerifyTokenInput,
    VerifyTokenOutput,
)
from .ports import TimePort

__all__ = [
    # Entry points
    "run_issue",
    "run_verify",
    # Service
    "TokenService",
    "ALGORITHM",
    "TOKEN_LIFETIME",
    "TOKEN_TYPE",
    # Models
    "IssueTokenInput",
    "SubjectId",
    "TokenClaims",
    "TokenOutput",
    "VerifiedIdentity",
    "VerifyTokenInput",
    "VerifyTokenOutput",
    # Errors
    "TokenError",
    "MalformedTokenError",
    "InvalidSignatureError",
    "ExpiredTokenError",
    # Ports
    "TimePort",
]
