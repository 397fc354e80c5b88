"""Refresh token lifecycle: issue (replacing earlier tokens), resolve, expire on read."""

import logging
import secrets
from datetime import UTC, datetime, timedelta

from app.models import RefreshToken
from app.repositories.base import RefreshTokenStore
from app.services.errors import AuthError, AuthErrorKind

logger = logging.getLogger(__name__)

# Fixed refresh lifetime: 7 days (604,800,000 ms).
REFRESH_TOKEN_DURATION = timedelta(days=7)

# 32 random bytes, URL-safe base64 (43 chars).
REFRESH_TOKEN_BYTES = 32


def _as_utc(value: datetime) -> datetime:
    """Stores without timezone support hand back naive datetimes; those are UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class RefreshTokenManager:
    """
    Creates, looks up and expires opaque refresh tokens.

    Expired tokens are purged only when resolve() finds them; there is no
    background sweep. No token is ever updated in place.
    """

    def __init__(
        self,
        store: RefreshTokenStore,
        duration: timedelta = REFRESH_TOKEN_DURATION,
    ) -> None:
        self.store = store
        self.duration = duration

    def issue(self, user_id: int) -> RefreshToken:
        """Replace every token owned by user_id with a fresh one and return it."""
        # Committed on its own: a failed save below leaves the user with no refresh token.
        self.delete_all_for_user(user_id)
        refresh_token = RefreshToken(
            user_id=user_id,
            token=secrets.token_urlsafe(REFRESH_TOKEN_BYTES),
            expiry_date=datetime.now(UTC) + self.duration,
        )
        return self.store.save(refresh_token)

    def resolve(self, token: str) -> RefreshToken | AuthError:
        """
        Return the live record for token, or an AuthError.

        INVALID_TOKEN when nothing matches. EXPIRED_TOKEN when the record is past
        its expiry_date; the record is deleted before returning.
        """
        refresh_token = self.store.find_by_token(token)
        if refresh_token is None:
            return AuthError(AuthErrorKind.INVALID_TOKEN)
        if _as_utc(refresh_token.expiry_date) < datetime.now(UTC):
            user_id = refresh_token.user_id
            self.store.delete(refresh_token)
            logger.info("Deleted expired refresh token for user_id=%s", user_id)
            return AuthError(AuthErrorKind.EXPIRED_TOKEN)
        return refresh_token

    def delete_all_for_user(self, user_id: int) -> int:
        return self.store.delete_by_user_id(user_id)
