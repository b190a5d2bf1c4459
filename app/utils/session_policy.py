"""
Session validity policy.

Tokens are not stored server-side, so "is this session still valid" is
answered by a policy object. The default compares the token issue time with
the user's last password change; a revocation-list policy can implement the
same interface and be installed on ``app.state.session_policy``.
"""

from abc import ABC, abstractmethod

from fastapi import Request

from app.models.user import User


class SessionPolicy(ABC):

    @abstractmethod
    def is_token_current(self, user: User, issued_at_us: int) -> bool:
        """Return False when a token issued at ``issued_at_us`` (epoch microseconds) must be refused"""


class PasswordChangeSessionPolicy(SessionPolicy):
    """Refuse tokens issued before the user's most recent password change."""

    def is_token_current(self, user: User, issued_at_us: int) -> bool:
        return not user.changed_password_after(issued_at_us)


def get_session_policy(request: Request) -> SessionPolicy:
    """FastAPI dependency for the installed session policy."""
    return request.app.state.session_policy
