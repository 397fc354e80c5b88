"""Persistence adapters for users and refresh tokens."""

from app.repositories.base import DuplicateRecordError, RefreshTokenStore, UserStore
from app.repositories.refresh_token import RefreshTokenRepository
from app.repositories.user import UserRepository

__all__ = [
    "DuplicateRecordError",
    "RefreshTokenRepository",
    "RefreshTokenStore",
    "UserRepository",
    "UserStore",
]
