"""
Authentication service: register, login and refresh over injected stores.

Every operation returns either its success value or an AuthError; expected
failures are never raised. Each operation fails before any write or completes
all of its writes, except that refresh deletes an expired token it discovers.
"""

import logging
from dataclasses import dataclass

from app.core.security import PasswordEncoder, TokenIssuer
from app.models import User
from app.models.user import DEFAULT_ROLE
from app.repositories.base import DuplicateRecordError, UserStore
from app.services.errors import AuthError, AuthErrorKind
from app.services.refresh_tokens import RefreshTokenManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthTokens:
    """Credentials handed back by login and refresh."""

    access_token: str
    refresh_token: str
    role: str


class AuthService:
    def __init__(
        self,
        users: UserStore,
        passwords: PasswordEncoder,
        tokens: TokenIssuer,
        refresh_tokens: RefreshTokenManager,
    ) -> None:
        self.users = users
        self.passwords = passwords
        self.tokens = tokens
        self.refresh_tokens = refresh_tokens

    def register(self, username: str, email: str, password: str) -> AuthError | None:
        """Create a USER-role account. Fails if the username or the email is taken."""
        if (
            self.users.find_by_username(username) is not None
            or self.users.find_by_email(email) is not None
        ):
            logger.warning("Registration rejected: username or email taken (username=%s)", username)
            return AuthError(AuthErrorKind.USER_ALREADY_EXISTS)

        user = User(
            username=username,
            email=email,
            password_hash=self.passwords.hash(password),
            role=DEFAULT_ROLE,
        )
        try:
            user = self.users.save(user)
        except DuplicateRecordError:
            # Lost a race with a concurrent register for the same username/email.
            logger.warning("Registration rejected on save: duplicate (username=%s)", username)
            return AuthError(AuthErrorKind.USER_ALREADY_EXISTS)
        logger.info("Registered user id=%s username=%s", user.id, username)
        return None

    def login(self, username: str, password: str) -> AuthTokens | AuthError:
        """
        Verify credentials and issue an access token plus a refresh token.

        Issuing the refresh token deletes any the user already had, so a login
        on one device invalidates the refresh token held by another.
        """
        user = self.users.find_by_username(username)
        if user is None:
            logger.warning("Login failed: unknown username=%s", username)
            return AuthError(AuthErrorKind.USER_NOT_FOUND)
        if not self.passwords.matches(password, user.password_hash):
            logger.warning("Login failed: bad password for username=%s", username)
            return AuthError(AuthErrorKind.INVALID_CREDENTIALS)

        refresh_token = self.refresh_tokens.issue(user.id)
        access_token = self.tokens.issue(user.username, user.role)
        logger.info("Login succeeded for user id=%s", user.id)
        return AuthTokens(
            access_token=access_token,
            refresh_token=refresh_token.token,
            role=user.role,
        )

    def refresh_token(self, token: str) -> AuthTokens | AuthError:
        """
        Exchange a live refresh token for a new access token.

        The refresh token itself is not rotated: the same string comes back and
        stays valid until its fixed expiry or the user's next login.
        """
        resolved = self.refresh_tokens.resolve(token)
        if isinstance(resolved, AuthError):
            logger.warning("Refresh rejected: %s", resolved.kind.value)
            return resolved

        user = self.users.find_by_id(resolved.user_id)
        if user is None:
            logger.warning("Refresh rejected: owner user_id=%s no longer exists", resolved.user_id)
            return AuthError(AuthErrorKind.USER_NOT_FOUND)

        access_token = self.tokens.issue(user.username, user.role)
        logger.info("Access token refreshed for user id=%s", user.id)
        return AuthTokens(
            access_token=access_token,
            refresh_token=resolved.token,
            role=user.role,
        )
