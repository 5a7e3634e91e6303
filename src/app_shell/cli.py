import argparse
import getpass
import logging
import sys

from src.adapters.clock import SystemClock
from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite.repos import SQLiteUserRepo
from src.api.deps import IdentityRulesAdapter
from src.app_shell.config import ConfigurationError, Settings, load_settings, validate_ops_rules
from src.components.auth import RegisterInput, run_register
from src.components.credentials import CredentialHasher
from src.components.tokens import TokenService
from src.rules.loader import load_rules
from src.rules.models import Rules

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("cli")


def get_config() -> tuple[Settings, Rules]:
    try:
        settings = load_settings()
        rules = load_rules(settings.rules_path)
        validate_ops_rules(rules, settings)
    except (ConfigurationError, FileNotFoundError, ValueError) as e:
        logger.error("Configuration invalid: %s", e)
        sys.exit(1)
    return settings, rules


def handle_migrate(settings: Settings) -> None:
    applied = SQLiteMigrator(settings.db_path, str(settings.migrations_dir)).run_migrations()
    print(f"Applied {len(applied)} migration(s).")


def handle_create_user(settings: Settings, rules: Rules, args: argparse.Namespace) -> None:
    password = args.password if args.password is not None else getpass.getpass("Password: ")

    result = run_register(
        RegisterInput(email=args.email, username=args.username, password=password),
        SQLiteUserRepo(settings.db_path),
        CredentialHasher(rules.auth.password_hashing.algorithm),
        TokenService(settings.secret_key, SystemClock()),
        IdentityRulesAdapter(rules),
    )
    if not result.success or result.user is None:
        for error in result.errors:
            logger.error("%s: %s", error.field or error.code, error.message)
        sys.exit(1)

    print(f"Created user {result.user.id} ({result.user.email}).")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Trade Log Auth CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # check-config
    subparsers.add_parser("check-config", help="Validate secret and rules without starting")

    # migrate
    subparsers.add_parser("migrate", help="Apply pending database migrations")

    # create-user
    create_parser = subparsers.add_parser("create-user", help="Register a user")
    create_parser.add_argument("email")
    create_parser.add_argument("username")
    create_parser.add_argument("--password", help="Prompted for when omitted")

    args = parser.parse_args(argv)

    settings, rules = get_config()

    if args.command == "check-config":
        print("Configuration OK.")
    elif args.command == "migrate":
        handle_migrate(settings)
    elif args.command == "create-user":
        handle_migrate(settings)
        handle_create_user(settings, rules, args)


if __name__ == "__main__":
    main()
