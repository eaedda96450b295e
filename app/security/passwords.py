from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(plain_password: str) -> str:
    """Return a salted Argon2 hash for plain_password."""
    return pwd_context.hash(plain_password)


def verify_password(plain_password: str, stored_hash: str) -> bool:
    """Verify a candidate password against a stored hash.

    Unknown or malformed hashes count as a mismatch.
    """
    if not stored_hash:
        return False
    try:
        return pwd_context.verify(plain_password, stored_hash)
    except (ValueError, TypeError):
        return False
