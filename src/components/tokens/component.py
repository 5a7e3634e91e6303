"""
Tokens component - Bearer token issue and verification.

Shell Layer - converts token failures into outputs.
"""

from __future__ import annotations

from ._impl import TokenService
from .models import (
    IssueTokenInput,
    TokenError,
    TokenOutput,
    VerifyTokenInput,
    VerifyTokenOutput,
)


def run_issue(inp: IssueTokenInput, service: TokenService) -> TokenOutput:
    token = service.issue(inp.subject_id, inp.aux_claim)
    return TokenOutput(token=token, success=True)


def run_verify(inp: VerifyTokenInput, service: TokenService) -> VerifyTokenOutput:
    try:
        identity = service.verify(inp.token)
    except TokenError as e:
        return VerifyTokenOutput(error=e, success=False)
    return VerifyTokenOutput(identity=identity, success=True)
