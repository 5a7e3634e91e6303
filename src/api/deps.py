from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.adapters.clock import SystemClock
from src.adapters.sqlite.repos import SQLiteUserRepo
from src.app_shell.config import Settings, load_settings
from src.components.auth import UNAUTHORIZED, AuthenticateInput, run_authenticate
from src.components.credentials import CredentialHasher, HashScheme
from src.components.tokens import TokenService, VerifiedIdentity
from src.rules.loader import load_rules
from src.rules.models import Rules


# --- Settings ---
@lru_cache
def get_settings() -> Settings:
    return load_settings()


# --- Rules ---
@lru_cache
def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return load_rules(settings.rules_path)


class IdentityRulesAdapter:
    """Adapter to map generic Rules to the auth component IdentityRulesPort."""

    def __init__(self, rules: Rules):
        self._rules = rules.auth

    def get_password_min_length(self) -> int:
        return self._rules.password_hashing.min_length

    def get_username_length_bounds(self) -> tuple[int, int]:
        return (self._rules.identity.username_min, self._rules.identity.username_max)


def get_identity_rules(rules: Rules = Depends(get_rules)) -> IdentityRulesAdapter:
    return IdentityRulesAdapter(rules)


# --- Repos ---
def get_user_repo(settings: Settings = Depends(get_settings)) -> SQLiteUserRepo:
    return SQLiteUserRepo(settings.db_path)


# --- Adapters ---
@lru_cache
def _hasher_for(scheme: HashScheme) -> CredentialHasher:
    return CredentialHasher(scheme)


def get_hasher(rules: Rules = Depends(get_rules)) -> CredentialHasher:
    return _hasher_for(rules.auth.password_hashing.algorithm)


# Time adapter for deterministic time operations
_clock_instance: SystemClock | None = None


def get_clock() -> SystemClock:
    """Get clock singleton."""
    global _clock_instance
    if _clock_instance is None:
        _clock_instance = SystemClock()
    return _clock_instance


def get_token_service(
    settings: Settings = Depends(get_settings),
    clock: SystemClock = Depends(get_clock),
) -> TokenService:
    return TokenService(settings.secret_key, clock)


# --- Auth ---
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    tokens: TokenService = Depends(get_token_service),
) -> VerifiedIdentity:
    token = credentials.credentials if credentials else ""
    result = run_authenticate(AuthenticateInput(token=token), tokens)

    if not result.success or result.identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=UNAUTHORIZED.message,
            headers={"WWW-Authenticate": "Bearer"},
        )

    return result.identity
