from typing import Any, NoReturn

from fastapi import APIRouter, Depends, HTTPException, status

from src.adapters.sqlite.repos import SQLiteUserRepo
from src.api.deps import (
    IdentityRulesAdapter,
    get_current_identity,
    get_hasher,
    get_identity_rules,
    get_token_service,
    get_user_repo,
)
from src.api.schemas import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from src.components.auth import (
    UNAUTHORIZED,
    AuthError,
    AuthOutput,
    LoginInput,
    RegisterInput,
    run_login,
    run_register,
)
from src.components.credentials import CredentialHasher
from src.components.tokens import TokenService, VerifiedIdentity

router = APIRouter()

_STATUS_BY_KIND: dict[str, int] = {
    "validation": status.HTTP_400_BAD_REQUEST,
    "conflict": status.HTTP_409_CONFLICT,
    "invalid_credentials": status.HTTP_401_UNAUTHORIZED,
    "unauthorized": status.HTTP_401_UNAUTHORIZED,
}


def _raise_for(errors: list[AuthError]) -> NoReturn:
    first = errors[0]
    status_code = _STATUS_BY_KIND[first.kind]

    detail: Any
    if first.kind == "validation":
        detail = [{"code": e.code, "field": e.field, "message": e.message} for e in errors]
    else:
        detail = first.message

    headers: dict[str, str] | None = None
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    raise HTTPException(status_code=status_code, detail=detail, headers=headers)


def _token_response(result: AuthOutput) -> TokenResponse:
    if not result.success or result.user is None or result.token is None:
        _raise_for(result.errors)

    user = result.user
    return TokenResponse(
        access_token=result.token,
        user=UserResponse(id=user.id, email=user.email, username=user.username),
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    user_repo: SQLiteUserRepo = Depends(get_user_repo),
    hasher: CredentialHasher = Depends(get_hasher),
    tokens: TokenService = Depends(get_token_service),
    rules: IdentityRulesAdapter = Depends(get_identity_rules),
) -> TokenResponse:
    """Create an identity and return its first access token."""
    inp = RegisterInput(email=body.email, username=body.username, password=body.password)
    return _token_response(run_register(inp, user_repo, hasher, tokens, rules))


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest,
    user_repo: SQLiteUserRepo = Depends(get_user_repo),
    hasher: CredentialHasher = Depends(get_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> TokenResponse:
    """Authenticate with email (or username) and password."""
    inp = LoginInput(email=body.email, password=body.password)
    return _token_response(run_login(inp, user_repo, hasher, tokens))


@router.get("/me", response_model=UserResponse)
def read_me(
    identity: VerifiedIdentity = Depends(get_current_identity),
    user_repo: SQLiteUserRepo = Depends(get_user_repo),
) -> UserResponse:
    """Get the identity behind the presented bearer token."""
    user = None
    if isinstance(identity.subject_id, int):
        user = user_repo.get_by_id(identity.subject_id)

    if user is None:
        _raise_for([UNAUTHORIZED])

    return UserResponse(id=user.id, email=user.email, username=user.username)
