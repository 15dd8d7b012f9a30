"""
Password hashing (bcrypt, cost 12) and username normalization.
"""

from pwdlib import PasswordHash
from pwdlib.hashers.bcrypt import BcryptHasher

BCRYPT_ROUNDS = 12
MAX_PASSWORD_BYTES = 72

password_hash = PasswordHash((BcryptHasher(rounds=BCRYPT_ROUNDS),))


def hash_password(password: str) -> str:
    return password_hash.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return False
    return password_hash.verify(password, hashed)


def normalize_username(value: str) -> str:
    return value.strip().lower()
