# app/core/hashing.py

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    # passlib compares digests in constant time
    return pwd_context.verify(plain_password, hashed_password)


def dummy_verify() -> None:
    """Spend one bcrypt round so a missing account costs as much as a bad password."""
    pwd_context.dummy_verify()
