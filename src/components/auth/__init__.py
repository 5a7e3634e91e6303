"""
Auth component - Registration, login and request authentication.

Composes the credentials and tokens components with a user store.
"""

from .component import (
    INVALID_CREDENTIALS,
    UNAUTHORIZED,
    normalize_identifier,
    run,
    run_authenticate,
    run_login,
    run_register,
    validate_registration,
)
from .models import (
    AuthenticateInput,
    AuthError,
    AuthErrorKind,
    AuthOutput,
    LoginInput,
    RegisterInput,
)
from .ports import (
    HasherPort,
    IdentityRulesPort,
    TokenServicePort,
    UserStorePort,
)

__all__ = [
    # Entry points
    "run",
    "run_authenticate",
    "run_login",
    "run_register",
    "validate_registration",
    "normalize_identifier",
    # Models
    "AuthenticateInput",
    "AuthError",
    "AuthErrorKind",
    "AuthOutput",
    "LoginInput",
    "RegisterInput",
    "INVALID_CREDENTIALS",
    "UNAUTHORIZED",
    # Ports
    "HasherPort",
    "IdentityRulesPort",
    "TokenServicePort",
    "UserStorePort",
]
