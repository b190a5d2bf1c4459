# app/config/security.py
# Security configuration for response headers and the session cookie

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from app.config.settings import Settings

SESSION_COOKIE = "jwt"
LOGGED_OUT_VALUE = "loggedout"
LOGOUT_COOKIE_TTL = timedelta(seconds=10)


class SecurityConfig:
    """Security configuration for the application"""

    # Security headers
    SECURITY_HEADERS = {
        'X-Content-Type-Options': 'nosniff',
        'X-Frame-Options': 'DENY',
        'X-XSS-Protection': '1; mode=block',
        'Strict-Transport-Security': 'max-age=31536000; includeSubDomains',
        'Content-Security-Policy': "default-src 'self'; script-src 'self' 'unsafe-inline'; style-src 'self' 'unsafe-inline'",
        'Referrer-Policy': 'no-referrer',
    }

    CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH"]

    @classmethod
    def cookie_options(cls, settings: Settings) -> Dict[str, Any]:
        """Cookie attributes shared by login and logout"""
        if settings.is_development:
            secure, samesite = False, "strict"
        else:
            secure, samesite = True, "none"
        return {
            "httponly": True,
            "path": "/",
            "secure": secure,
            "samesite": settings.cookie_samesite or samesite,
        }

    @classmethod
    def session_cookie_expiry(cls, settings: Settings) -> datetime:
        """Absolute expiry for a freshly issued session cookie"""
        return datetime.now(timezone.utc) + timedelta(days=settings.cookie_expires_in)

    @classmethod
    def logout_cookie_expiry(cls) -> datetime:
        return datetime.now(timezone.utc) + LOGOUT_COOKIE_TTL
