"""
Storage interfaces consumed by the auth engine.

Implementations must back username, email and refresh-token uniqueness with the
store's own constraints; the engine holds no locks of its own.
"""

from typing import Protocol

from app.models import RefreshToken, User


class DuplicateRecordError(Exception):
    """A write was rejected by a uniqueness constraint (e.g. a concurrent insert won)."""


class UserStore(Protocol):
    def find_by_username(self, username: str) -> User | None: ...

    def find_by_email(self, email: str) -> User | None: ...

    def find_by_id(self, user_id: int) -> User | None: ...

    def save(self, user: User) -> User:
        """Persist user and return it with id assigned. Raises DuplicateRecordError on a unique clash."""
        ...


class RefreshTokenStore(Protocol):
    """
    Refresh token persistence.

    delete_by_user_id followed by save is not atomic: two concurrent logins for
    one user can each leave a live token behind.
    """

    def find_by_token(self, token: str) -> RefreshToken | None: ...

    def save(self, refresh_token: RefreshToken) -> RefreshToken: ...

    def delete(self, refresh_token: RefreshToken) -> None: ...

    def delete_by_user_id(self, user_id: int) -> int:
        """Delete every token owned by user_id; return how many went. Idempotent."""
        ...
