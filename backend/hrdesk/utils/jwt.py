import uuid
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_HOURS = 8


def create_access_token(data: dict, secret: str, *, expires_hours: int = ACCESS_TOKEN_EXPIRE_HOURS) -> str:
    now = datetime.now(timezone.utc)
    to_encode = data.copy()
    # jti keeps two tokens minted in the same second distinct.
    to_encode.update({
        "iat": now,
        "exp": now + timedelta(hours=expires_hours),
        "jti": uuid.uuid4().hex,
    })
    return jwt.encode(to_encode, secret, algorithm=ALGORITHM)


def decode_access_token(token: str, secret: str) -> dict | None:
    """Return the verified claims, or None for a bad signature, malformed or expired token."""
    try:
        return jwt.decode(token, secret, algorithms=[ALGORITHM])
    except JWTError:
        return None
