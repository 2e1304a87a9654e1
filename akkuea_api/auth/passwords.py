"""Password hashing and verification."""

from functools import lru_cache

from pwdlib import PasswordHash


@lru_cache(maxsize=1)
def get_password_hasher() -> PasswordHash:
    return PasswordHash.recommended()


@lru_cache(maxsize=1)
def get_dummy_password_hash() -> str:
    """Hash checked against when no account matches, so lookups cost the same."""
    return hash_password("akkuea-dummy-password")


def hash_password(password: str) -> str:
    return get_password_hasher().hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return get_password_hasher().verify(plain_password, hashed_password)
