"""
Credentials component unit tests.

Tests for password hashing, verification and scheme upgrades.
"""

from __future__ import annotations

import hashlib

import pytest

from src.components.credentials import CredentialHasher


@pytest.fixture(scope="module")
def argon2_hasher() -> CredentialHasher:
    return CredentialHasher("argon2")


@pytest.fixture(scope="module")
def sha256_hasher() -> CredentialHasher:
    return CredentialHasher("sha256")


class TestSha256Scheme:
    """Unsalted digests of the original password store."""

    def test_hash_is_deterministic(self, sha256_hasher: CredentialHasher) -> None:
        assert sha256_hasher.hash("secret1") == sha256_hasher.hash("secret1")

    def test_hash_is_plain_sha256_hex(self, sha256_hasher: CredentialHasher) -> None:
        expected = hashlib.sha256(b"secret1").hexdigest()
        assert sha256_hasher.hash("secret1") == expected

    @pytest.mark.parametrize("password", ["secret1", "p@ss w0rd", "ünïcødé", "x" * 200])
    def test_verify_round_trip(self, sha256_hasher: CredentialHasher, password: str) -> None:
        assert sha256_hasher.verify(password, sha256_hasher.hash(password)) is True

    def test_verify_wrong_password(self, sha256_hasher: CredentialHasher) -> None:
        digest = sha256_hasher.hash("secret1")
        assert sha256_hasher.verify("secret2", digest) is False

    def test_does_not_accept_argon2_digests(
        self, sha256_hasher: CredentialHasher, argon2_hasher: CredentialHasher
    ) -> None:
        digest = argon2_hasher.hash("secret1")
        assert sha256_hasher.verify("secret1", digest) is False

    def test_never_needs_rehash(self, sha256_hasher: CredentialHasher) -> None:
        assert sha256_hasher.needs_rehash(sha256_hasher.hash("secret1")) is False


class TestArgon2Scheme:
    def test_hash_is_not_plaintext(self, argon2_hasher: CredentialHasher) -> None:
        digest = argon2_hasher.hash("my-secret-password")
        assert digest != "my-secret-password"
        assert digest.startswith("$argon2")

    def test_hash_is_salted(self, argon2_hasher: CredentialHasher) -> None:
        assert argon2_hasher.hash("secret1") != argon2_hasher.hash("secret1")

    def test_verify_round_trip(self, argon2_hasher: CredentialHasher) -> None:
        digest = argon2_hasher.hash("secret1")
        assert argon2_hasher.verify("secret1", digest) is True

    def test_verify_wrong_password(self, argon2_hasher: CredentialHasher) -> None:
        digest = argon2_hasher.hash("secret1")
        assert argon2_hasher.verify("Secret1", digest) is False

    def test_verifies_legacy_sha256_digest(self, argon2_hasher: CredentialHasher) -> None:
        legacy = hashlib.sha256(b"secret1").hexdigest()
        assert argon2_hasher.verify("secret1", legacy) is True
        assert argon2_hasher.verify("other", legacy) is False

    def test_legacy_digest_needs_rehash(self, argon2_hasher: CredentialHasher) -> None:
        legacy = hashlib.sha256(b"secret1").hexdigest()
        assert argon2_hasher.needs_rehash(legacy) is True

    def test_current_digest_does_not_need_rehash(self, argon2_hasher: CredentialHasher) -> None:
        assert argon2_hasher.needs_rehash(argon2_hasher.hash("secret1")) is False


class TestMalformedDigests:
    @pytest.mark.parametrize("digest", ["", "not-a-digest", "$2b$12$truncated", "ab" * 10])
    def test_unrecognised_digest_verifies_false(
        self, argon2_hasher: CredentialHasher, digest: str
    ) -> None:
        assert argon2_hasher.verify("secret1", digest) is False

    def test_unrecognised_digest_does_not_need_rehash(
        self, argon2_hasher: CredentialHasher
    ) -> None:
        assert argon2_hasher.needs_rehash("not-a-digest") is False


def test_dummy_digest_is_stable_and_verifiable(argon2_hasher: CredentialHasher) -> None:
    digest = argon2_hasher.dummy_digest
    assert argon2_hasher.dummy_digest is digest
    assert argon2_hasher.verify("anything", digest) is False


def test_unknown_scheme_rejected() -> None:
    with pytest.raises(ValueError, match="Unsupported"):
        CredentialHasher("md5")  # type: ignore[arg-type]
