from __future__ import annotations

import pytest

from api_dashboard.passwords import hash_password, verify_password


def test_hash_password_is_salted_and_verifiable() -> None:
    first = hash_password("secret1")
    second = hash_password("secret1")

    assert first != second
    assert first.startswith("$2b$10$")
    assert verify_password("secret1", first)
    assert verify_password("secret1", second)
    assert not verify_password("secret2", first)


def test_hash_password_enforces_minimum_cost() -> None:
    with pytest.raises(ValueError, match="at least 10 rounds"):
        hash_password("secret1", rounds=4)


def test_hash_password_rejects_oversized_secret() -> None:
    with pytest.raises(ValueError, match="at most 72 bytes"):
        hash_password("x" * 73)


def test_verify_password_rejects_oversized_and_garbage_hashes() -> None:
    stored = hash_password("secret1")
    assert not verify_password("x" * 100, stored)
    assert not verify_password("secret1", "not-a-bcrypt-hash")
