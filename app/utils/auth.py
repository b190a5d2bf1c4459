# app/utils/auth.py
import logging
from typing import Optional

from fastapi import Cookie, Depends, HTTPException, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.config.security import SecurityConfig, SESSION_COOKIE, LOGGED_OUT_VALUE
from app.config.settings import Settings
from app.database import get_db
from app.models.user import User
from app.utils.security import (
    InvalidTokenError,
    TokenExpiredError,
    create_access_token,
    decode_access_token,
)
from app.utils.session_policy import SessionPolicy, get_session_policy

logger = logging.getLogger(__name__)

# Header is optional here; the cookie is the fallback
bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def auth_error(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def issue_token(user: User, settings: Settings) -> str:
    return create_access_token(
        user.id,
        settings.jwt_secret,
        settings.jwt_algorithm,
        settings.jwt_expires_in,
    )


def send_token(user: User, response: Response, settings: Settings) -> str:
    """Issue a token for ``user`` and attach it to ``response`` as the session cookie"""
    token = issue_token(user, settings)
    response.set_cookie(
        SESSION_COOKIE,
        token,
        expires=SecurityConfig.session_cookie_expiry(settings),
        **SecurityConfig.cookie_options(settings),
    )
    return token


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.set_cookie(
        SESSION_COOKIE,
        LOGGED_OUT_VALUE,
        expires=SecurityConfig.logout_cookie_expiry(),
        **SecurityConfig.cookie_options(settings),
    )


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    jwt_cookie: Optional[str] = Cookie(default=None, alias=SESSION_COOKIE),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    policy: SessionPolicy = Depends(get_session_policy),
) -> User:
    """Gate for protected routes; resolves the request's token to a user"""
    token = credentials.credentials if credentials else jwt_cookie
    if not token:
        raise auth_error("You are not logged in! Please log in to access this route.")

    try:
        claims = decode_access_token(token, settings.jwt_secret, settings.jwt_algorithm)
    except TokenExpiredError:
        raise auth_error("Your token has expired! Please log in again.")
    except InvalidTokenError:
        raise auth_error("Invalid token. Please log in again.")

    user = db.get(User, claims.user_id)
    if user is None:
        logger.info("Token presented for deleted user %s", claims.user_id)
        raise auth_error("The user belonging to this token no longer exists.")

    if not policy.is_token_current(user, claims.issued_at_us):
        logger.info("Token for user %s predates a password change", user.id)
        raise auth_error("User recently changed password. Please log in again.")

    return user
