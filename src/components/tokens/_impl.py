"""
TokenService - Signed, time-bounded bearer tokens.

Tokens use the compact layout header.payload.signature, each segment
base64url without padding, signed with HMAC-SHA256. The algorithm is fixed
here and never taken from a presented header.

Verification order: structure, header, signature, payload shape, expiry.

Functional Core - reads only the injected clock.
"""

from __future__ import annotations

import hmac
import json
import re
from datetime import timedelta
from typing import Any

from jose import jwk, jwt
from jose.constants import ALGORITHMS
from jose.utils import base64url_decode, base64url_encode
from pydantic import ValidationError

from .models import (
    ExpiredTokenError,
    InvalidSignatureError,
    MalformedTokenError,
    SubjectId,
    TokenClaims,
    VerifiedIdentity,
)
from .ports import TimePort

ALGORITHM = ALGORITHMS.HS256
TOKEN_TYPE = "JWT"
TOKEN_LIFETIME = timedelta(hours=24)

_EXPECTED_HEADER = {"alg": ALGORITHM, "typ": TOKEN_TYPE}
_SEGMENT_RE = re.compile(r"[A-Za-z0-9_-]+")


def _decode_segment(segment: str) -> Any:
    try:
        return json.loads(base64url_decode(segment.encode("ascii")))
    except (ValueError, RecursionError) as e:
        # Deeply nested JSON exhausts the parser before any signature check
        raise MalformedTokenError("Token segment is not base64url-encoded JSON") from e


class TokenService:
    """Issues and verifies HS256 bearer tokens with a process-wide secret."""

    def __init__(self, secret: str, clock: TimePort) -> None:
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret
        self._key = jwk.construct(secret, ALGORITHM)
        self._clock = clock

    def __repr__(self) -> str:
        return f"TokenService(algorithm={ALGORITHM!r}, lifetime={TOKEN_LIFETIME})"

    def _now(self) -> int:
        return int(self._clock.now_utc().timestamp())

    def issue(self, subject_id: SubjectId, aux_claim: str) -> str:
        issued_at = self._now()
        claims = TokenClaims(
            sub=subject_id,
            email=aux_claim,
            iat=issued_at,
            exp=issued_at + int(TOKEN_LIFETIME.total_seconds()),
        )
        token: str = jwt.encode(claims.model_dump(), self._secret, algorithm=ALGORITHM)
        return token

    def verify(self, token_text: str) -> VerifiedIdentity:
        """
        Verify integrity and freshness of a presented token.

        Raises:
            MalformedTokenError: wrong segment count, bad encoding, unexpected
                header or payload shape.
            InvalidSignatureError: signature does not match header + payload.
            ExpiredTokenError: current time is past the expiry claim.
        """
        segments = token_text.split(".") if isinstance(token_text, str) else []
        if len(segments) != 3 or not all(segments):
            raise MalformedTokenError("Token must have exactly three non-empty segments")
        if not all(_SEGMENT_RE.fullmatch(s) for s in segments):
            raise MalformedTokenError("Token segments must be base64url")

        encoded_header, encoded_payload, encoded_signature = segments

        header = _decode_segment(encoded_header)
        if header != _EXPECTED_HEADER:
            raise MalformedTokenError("Unexpected token header")

        # The encoded segment must match exactly; spare bits in its last
        # character would otherwise admit alternative spellings.
        signing_input = f"{encoded_header}.{encoded_payload}".encode("ascii")
        expected = base64url_encode(self._key.sign(signing_input))
        if not hmac.compare_digest(expected, encoded_signature.encode("ascii")):
            raise InvalidSignatureError("Token signature mismatch")

        try:
            claims = TokenClaims.model_validate(_decode_segment(encoded_payload))
        except ValidationError as e:
            raise MalformedTokenError("Token payload has an unexpected shape") from e

        if self._now() > claims.exp:
            raise ExpiredTokenError("Token has expired")

        return VerifiedIdentity(subject_id=claims.sub, aux_claim=claims.email)
