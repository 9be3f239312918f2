"""Password hashing utilities."""
import bcrypt


def hash_password(password: str, rounds: int = 10) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: The password to hash
        rounds: bcrypt work factor (log2 of the iteration count)

    Returns:
        Bcrypt hash string
    """
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify a password against a bcrypt hash.

    Args:
        password: The password to verify
        password_hash: The stored bcrypt hash

    Returns:
        True if the password matches, False otherwise
    """
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        # Malformed stored hash or over-long password
        return False
