"""
Identity tokens.

A token is a JWT signed with the server secret carrying the user id in
``sub`` and an expiry 24 hours (configurable) after issue. Both signature
and expiry are checked on every decode.
"""

from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt

from sooner.errors import InvalidToken

DEFAULT_TTL_HOURS = 24
DEFAULT_ALGORITHM = "HS256"


def create_token(
    user_id: str,
    secret: str,
    ttl_hours: int = DEFAULT_TTL_HOURS,
    algorithm: str = DEFAULT_ALGORITHM,
    now: datetime | None = None,
) -> str:
    """Sign a token identifying ``user_id``."""
    issued = now or datetime.now(timezone.utc)
    claims = {
        "sub": user_id,
        "iat": int(issued.timestamp()),
        "exp": int((issued + timedelta(hours=ttl_hours)).timestamp()),
    }
    return jwt.encode(claims, secret, algorithm=algorithm)


def decode_token(token: str, secret: str, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """
    Verify a token and return the user id it carries.

    Raises:
        InvalidToken: bad signature, malformed token, expired, or no subject
    """
    try:
        claims = jwt.decode(token, secret, algorithms=[algorithm])
    except ExpiredSignatureError:
        raise InvalidToken("Token expired", code="TOKEN_EXPIRED")
    except JWTError:
        raise InvalidToken("Invalid token")

    user_id = claims.get("sub")
    if not isinstance(user_id, str) or not user_id:
        raise InvalidToken("Invalid token")
    return user_id
