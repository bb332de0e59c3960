"""Store session tokens.

Tokens are issued after the Squarespace OAuth handshake and identify the
connected store; this module only signs and verifies them.
"""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from alttext.config import get_settings

settings = get_settings()


def create_session_token(store_id: int, site_id: str) -> str:
    """Create a JWT session token for a connected store."""
    expire = datetime.now(UTC) + timedelta(minutes=settings.session_expiration_minutes)
    to_encode = {
        "sub": str(store_id),
        "site_id": site_id,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_session_token(token: str) -> dict | None:
    """Decode and validate a session token."""
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
