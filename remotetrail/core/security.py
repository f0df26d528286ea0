import logging
import bcrypt
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import jwt
from remotetrail.core import config

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"


def hash_password(password: str) -> str:
    """
    Hash a password with bcrypt.

    Used to produce the ADMIN_PASSWORD_HASH value for deployment.

    Args:
        password: Plain text password (bcrypt only looks at the first 72 bytes)

    Returns:
        Hashed password string

    Raises:
        ValueError: If password cannot be hashed
    """
    password_bytes = password.encode('utf-8')
    if len(password_bytes) > 72:
        logger.warning("Password exceeds 72 bytes, truncating before hashing")
        password_bytes = password_bytes[:72]
    try:
        return bcrypt.hashpw(password_bytes, bcrypt.gensalt()).decode('utf-8')
    except ValueError as e:
        logger.error(f"Password hashing failed (ValueError): {e}")
        raise ValueError("Invalid password") from e


def verify_password(password: str, hashed: Optional[str]) -> bool:
    """
    Verify a password against its bcrypt hash.

    Returns False for a missing or malformed hash instead of raising.
    """
    if not hashed:
        return False
    password_bytes = password.encode('utf-8')[:72]
    try:
        return bcrypt.checkpw(password_bytes, hashed.encode('utf-8'))
    except (ValueError, TypeError) as e:
        logger.error(f"Password verification failed: {e}")
        return False


def create_access_token(data: dict, expires_delta: timedelta = None):
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.ALGORITHM)


def authenticate_admin(email: str, password: str) -> bool:
    """Check credentials against the single configured admin account."""
    if not config.ADMIN_PASSWORD_HASH:
        logger.warning("Admin login attempted but ADMIN_PASSWORD_HASH is not configured")
        return False
    if email.strip().lower() != config.ADMIN_EMAIL.lower():
        return False
    return verify_password(password, config.ADMIN_PASSWORD_HASH)
