# app/utils/middleware.py
from fastapi import Request

from app.config.security import SecurityConfig


async def add_security_headers(request: Request, call_next):
    """Attach the static security headers to every response"""
    response = await call_next(request)
    for header, value in SecurityConfig.SECURITY_HEADERS.items():
        response.headers.setdefault(header, value)
    return response
