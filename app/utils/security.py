# app/utils/security.py
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt

from app.utils.dates import epoch_micros, to_naive_utc


class TokenExpiredError(Exception):
    pass


class InvalidTokenError(Exception):
    pass


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    issued_at_us: int  # microseconds since the epoch


BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    # bcrypt only looks at the first 72 bytes
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 12) -> str:
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def create_access_token(
    user_id: int,
    secret: str,
    algorithm: str,
    expires_in: timedelta,
    issued_at: Optional[datetime] = None,
) -> str:
    """Sign a token carrying the user id and issue time"""
    issued_at = issued_at or datetime.now(timezone.utc)
    claims = {
        "id": user_id,
        "iat": int(issued_at.timestamp()),
        # Sub-second issue time, compared against password_changed_at
        "iat_us": epoch_micros(to_naive_utc(issued_at)),
        "exp": int((issued_at + expires_in).timestamp()),
    }
    return jwt.encode(claims, secret, algorithm=algorithm)


def decode_access_token(token: str, secret: str, algorithm: str) -> TokenClaims:
    """Verify signature and expiry.

    Raises:
        TokenExpiredError: the token was valid but its ``exp`` has passed
        InvalidTokenError: anything else (bad signature, malformed, missing claims)
    """
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except ExpiredSignatureError as exc:
        raise TokenExpiredError(str(exc)) from exc
    except JWTError as exc:
        raise InvalidTokenError(str(exc)) from exc

    user_id = payload.get("id")
    issued_at_us = payload.get("iat_us")
    if not isinstance(user_id, int) or not isinstance(issued_at_us, int):
        raise InvalidTokenError("Token is missing required claims")
    return TokenClaims(user_id=user_id, issued_at_us=issued_at_us)
