"""
Application configuration.

The token-signing secret comes from the deployment environment and is
checked once at startup. A missing or placeholder secret is fatal.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from src.rules.models import Rules

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]

SECRET_ENV = "TRADELOG_SECRET_KEY"

# Well-known defaults that must never sign production tokens
PLACEHOLDER_SECRETS = frozenset(
    {
        "dev-secret-unsafe",
        "change-me-in-prod",
        "change-me",
        "changeme",
        "secret",
        "default",
        "password",
        "your-secret-key",
    }
)


class ConfigurationError(Exception):
    """Raised when the service must not start with the given configuration."""


def _split_csv(raw: str) -> list[str]:
    return [x.strip() for x in raw.split(",") if x.strip()]


def load_cors_origins(environ: Mapping[str, str] | None = None) -> list[str]:
    env = os.environ if environ is None else environ
    return _split_csv(env.get("TRADELOG_CORS_ORIGINS", "http://localhost:3000"))


def load_secret(environ: Mapping[str, str] | None = None) -> str:
    env = os.environ if environ is None else environ
    secret = env.get(SECRET_ENV, "")

    if not secret.strip():
        raise ConfigurationError(f"{SECRET_ENV} is not set")
    if secret != secret.strip():
        raise ConfigurationError(f"{SECRET_ENV} has leading or trailing whitespace")
    if secret.lower() in PLACEHOLDER_SECRETS:
        raise ConfigurationError(f"{SECRET_ENV} is set to a known placeholder value")
    return secret


class Settings:
    def __init__(
        self,
        secret_key: str,
        data_dir: Path,
        rules_path: Path,
        migrations_dir: Path,
    ) -> None:
        self.secret_key = secret_key
        self.data_dir = data_dir
        self.db_path = str(data_dir / "tradelog.db")
        self.rules_path = rules_path
        self.migrations_dir = migrations_dir

    def __repr__(self) -> str:
        return f"Settings(data_dir={str(self.data_dir)!r}, rules_path={str(self.rules_path)!r})"


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Read settings from the environment. Raises ConfigurationError on a bad secret."""
    env = os.environ if environ is None else environ
    return Settings(
        secret_key=load_secret(env),
        data_dir=Path(env.get("TRADELOG_DATA_DIR", "./data")),
        rules_path=Path(env.get("TRADELOG_RULES_PATH", str(PROJECT_ROOT / "rules.yaml"))),
        migrations_dir=PROJECT_ROOT / "migrations",
    )


def validate_ops_rules(
    rules: Rules, settings: Settings, environ: Mapping[str, str] | None = None
) -> None:
    """
    Validate operational requirements before startup.
    Raises ConfigurationError; never returns with an unusable configuration.
    """
    env = os.environ if environ is None else environ

    missing = [name for name in rules.ops.required_env if not env.get(name)]
    if missing:
        raise ConfigurationError(f"Missing required environment variables: {', '.join(missing)}")

    min_secret = rules.auth.tokens.min_secret_length
    if len(settings.secret_key) < min_secret:
        raise ConfigurationError(f"{SECRET_ENV} must be at least {min_secret} characters")

    identity = rules.auth.identity
    if identity.username_min > identity.username_max:
        raise ConfigurationError("auth.identity.username_min exceeds username_max")

    settings.data_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Configuration validated")
