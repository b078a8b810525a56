from __future__ import annotations

import bcrypt

MIN_HASH_ROUNDS = 10
# bcrypt only looks at the first 72 bytes of a secret.
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, *, rounds: int = MIN_HASH_ROUNDS) -> str:
    if rounds < MIN_HASH_ROUNDS:
        raise ValueError(f"bcrypt cost must be at least {MIN_HASH_ROUNDS} rounds")

    secret = password.encode("utf-8")
    if len(secret) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")
    return bcrypt.hashpw(secret, bcrypt.gensalt(rounds=rounds)).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    secret = password.encode("utf-8")
    if len(secret) > MAX_PASSWORD_BYTES:
        return False

    try:
        return bcrypt.checkpw(secret, password_hash.encode("ascii"))
    except ValueError:
        # Stored value is not a bcrypt hash.
        return False
