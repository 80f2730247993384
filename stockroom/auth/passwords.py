"""Password hashing.

bcrypt with a fixed work factor. Every call draws a fresh salt, so two
hashes of the same password differ byte-for-byte while both verify.
"""

import bcrypt

from stockroom.core.errors import InputError

BCRYPT_ROUNDS = 10

# bcrypt only reads the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """
    Hash a password with bcrypt.

    Args:
        password: The plain text password to hash

    Returns:
        The bcrypt hash ("$2b$10$...") with its salt embedded

    Raises:
        InputError: The password exceeds bcrypt's input limit
    """
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise InputError(f"Password longer than {MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash. Malformed hashes never match."""
    if not password_hash:
        return False
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
    except ValueError:
        return False
