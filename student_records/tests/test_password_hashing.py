from __future__ import annotations

from student_records.application.services.password_hashing import BcryptPasswordHasher


def test_hash_is_salted_bcrypt() -> None:
    hasher = BcryptPasswordHasher(rounds=4)

    first = hasher.hash("secret1")
    second = hasher.hash("secret1")

    assert first.startswith("$2b$04$")
    assert first != second
    assert "secret1" not in first


def test_verify() -> None:
    hasher = BcryptPasswordHasher(rounds=4)
    hashed = hasher.hash("secret1")

    assert hasher.verify("secret1", hashed)
    assert not hasher.verify("secret2", hashed)


def test_verify_rejects_garbage_hashes() -> None:
    hasher = BcryptPasswordHasher(rounds=4)

    assert not hasher.verify("secret1", "")
    assert not hasher.verify("secret1", "plain-text")


def test_long_passwords_are_truncated_not_rejected() -> None:
    hasher = BcryptPasswordHasher(rounds=4)
    long_password = "x" * 100

    hashed = hasher.hash(long_password)

    assert hasher.verify(long_password, hashed)
