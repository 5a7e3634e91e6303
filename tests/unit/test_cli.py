import pytest

from src.adapters.sqlite.repos import SQLiteUserRepo
from src.app_shell.cli import main

GOOD_SECRET = "cli-test-secret-0123456789abcdefghij"


@pytest.fixture
def env(monkeypatch, tmp_path):
    monkeypatch.setenv("TRADELOG_SECRET_KEY", GOOD_SECRET)
    monkeypatch.setenv("TRADELOG_DATA_DIR", str(tmp_path))
    return tmp_path


def test_check_config(env, capsys):
    main(["check-config"])
    assert "Configuration OK." in capsys.readouterr().out


def test_check_config_rejects_placeholder(env, monkeypatch):
    monkeypatch.setenv("TRADELOG_SECRET_KEY", "CHANGE-ME-IN-PROD")
    with pytest.raises(SystemExit) as exc_info:
        main(["check-config"])
    assert exc_info.value.code == 1


def test_migrate(env, capsys):
    main(["migrate"])
    assert "Applied 1 migration(s)." in capsys.readouterr().out

    main(["migrate"])
    assert "Applied 0 migration(s)." in capsys.readouterr().out


def test_create_user(env, capsys):
    main(["create-user", "Alice@Example.com", "alice", "--password", "secret1"])

    out = capsys.readouterr().out
    assert "(alice@example.com)" in out
    user = SQLiteUserRepo(str(env / "tradelog.db")).find_by_identifier("alice@example.com")
    assert user is not None
    assert user.password_hash.startswith("$argon2")


def test_create_user_duplicate(env):
    main(["create-user", "alice@example.com", "alice", "--password", "secret1"])

    with pytest.raises(SystemExit) as exc_info:
        main(["create-user", "alice@example.com", "bob", "--password", "other"])
    assert exc_info.value.code == 1


def test_create_user_prompts_for_password(env, monkeypatch, capsys):
    monkeypatch.setattr("getpass.getpass", lambda prompt="": "secret1")
    main(["create-user", "bob@example.com", "bob"])
    assert "(bob@example.com)" in capsys.readouterr().out
