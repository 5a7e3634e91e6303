"""
Auth component - Register, login and authenticate flows.

Shell Layer - validation errors, conflicts and token failures are returned
as AuthError records.
"""

import logging
import re

from src.components.tokens import TokenError
from src.domain.errors import DuplicateIdentityError

from .models import (
    AuthenticateInput,
    AuthError,
    AuthOutput,
    LoginInput,
    RegisterInput,
)
from .ports import HasherPort, IdentityRulesPort, TokenServicePort, UserStorePort

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")
_USERNAME_RE = re.compile(r"[A-Za-z0-9_.-]+")

INVALID_CREDENTIALS = AuthError(
    kind="invalid_credentials",
    code="invalid_credentials",
    message="Invalid email or password",
)
UNAUTHORIZED = AuthError(kind="unauthorized", code="unauthorized", message="Not authenticated")


def normalize_identifier(value: str) -> str:
    """Emails are case-insensitive; usernames keep their case."""
    value = (value or "").strip()
    return value.lower() if "@" in value else value


def validate_registration(
    email: str, username: str, password: str, rules: IdentityRulesPort
) -> list[AuthError]:
    errors: list[AuthError] = []

    if not email:
        errors.append(
            AuthError(
                kind="validation",
                code="email_required",
                message="Email is required",
                field="email",
            )
        )
    elif not _EMAIL_RE.fullmatch(email):
        errors.append(
            AuthError(
                kind="validation",
                code="email_invalid",
                message="Email address is not valid",
                field="email",
            )
        )

    min_len, max_len = rules.get_username_length_bounds()
    if not username:
        errors.append(
            AuthError(
                kind="validation",
                code="username_required",
                message="Username is required",
                field="username",
            )
        )
    elif not (min_len <= len(username) <= max_len):
        errors.append(
            AuthError(
                kind="validation",
                code="username_length",
                message=f"Username must be between {min_len} and {max_len} characters",
                field="username",
            )
        )
    elif not _USERNAME_RE.fullmatch(username):
        errors.append(
            AuthError(
                kind="validation",
                code="username_invalid",
                message="Username may only contain letters, digits, '.', '_' and '-'",
                field="username",
            )
        )

    min_password = rules.get_password_min_length()
    if not password:
        errors.append(
            AuthError(
                kind="validation",
                code="password_required",
                message="Password is required",
                field="password",
            )
        )
    elif len(password) < min_password:
        errors.append(
            AuthError(
                kind="validation",
                code="password_too_short",
                message=f"Password must be at least {min_password} characters",
                field="password",
            )
        )

    return errors


def run_register(
    inp: RegisterInput,
    user_store: UserStorePort,
    hasher: HasherPort,
    tokens: TokenServicePort,
    rules: IdentityRulesPort,
) -> AuthOutput:
    email = normalize_identifier(inp.email)
    username = (inp.username or "").strip()

    errors = validate_registration(email, username, inp.password, rules)
    if errors:
        return AuthOutput(errors=errors)

    digest = hasher.hash(inp.password)
    try:
        user = user_store.insert(email=email, username=username, password_hash=digest)
    except DuplicateIdentityError as e:
        logger.info("Registration rejected: %s already registered", e.field)
        return AuthOutput(
            errors=[
                AuthError(
                    kind="conflict",
                    code=f"{e.field}_taken",
                    message=f"{e.field.capitalize()} is already registered",
                    field=e.field,
                )
            ]
        )

    token = tokens.issue(user.id, user.email)
    logger.info("Registered user %s", user.id)
    return AuthOutput(user=user, token=token, success=True)


def run_login(
    inp: LoginInput,
    user_store: UserStorePort,
    hasher: HasherPort,
    tokens: TokenServicePort,
) -> AuthOutput:
    identifier = normalize_identifier(inp.email)
    password = inp.password or ""

    user = user_store.find_by_identifier(identifier) if identifier else None
    if user is None:
        # Same hashing work as a real check, so timing does not reveal unknown identities
        hasher.verify(password, hasher.dummy_digest)
        logger.info("Login failed: unknown identity")
        return AuthOutput(errors=[INVALID_CREDENTIALS])

    if not hasher.verify(password, user.password_hash):
        logger.info("Login failed for user %s: wrong password", user.id)
        return AuthOutput(errors=[INVALID_CREDENTIALS])

    if hasher.needs_rehash(user.password_hash):
        user_store.update_password_hash(user.id, hasher.hash(password))
        logger.info("Upgraded password digest for user %s", user.id)

    token = tokens.issue(user.id, user.email)
    logger.info("User %s logged in", user.id)
    return AuthOutput(user=user, token=token, success=True)


def run_authenticate(inp: AuthenticateInput, tokens: TokenServicePort) -> AuthOutput:
    try:
        identity = tokens.verify(inp.token)
    except TokenError as e:
        # Reason stays in the logs; callers only ever see UNAUTHORIZED
        logger.info("Token rejected: %s", e.reason)
        return AuthOutput(errors=[UNAUTHORIZED])

    return AuthOutput(identity=identity, success=True)


def run(
    inp: RegisterInput | LoginInput | AuthenticateInput,
    *,
    user_store: UserStorePort | None = None,
    hasher: HasherPort | None = None,
    tokens: TokenServicePort | None = None,
    rules: IdentityRulesPort | None = None,
) -> AuthOutput:
    if isinstance(inp, RegisterInput):
        assert user_store and hasher and tokens and rules
        return run_register(inp, user_store, hasher, tokens, rules)

    elif isinstance(inp, LoginInput):
        assert user_store and hasher and tokens
        return run_login(inp, user_store, hasher, tokens)

    elif isinstance(inp, AuthenticateInput):
        assert tokens
        return run_authenticate(inp, tokens)

    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
