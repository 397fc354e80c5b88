"""Failure kinds returned (not raised) by the authentication service."""

from dataclasses import dataclass
from enum import Enum


class AuthErrorKind(str, Enum):
    USER_ALREADY_EXISTS = "user_already_exists"
    USER_NOT_FOUND = "user_not_found"
    INVALID_CREDENTIALS = "invalid_credentials"
    INVALID_TOKEN = "invalid_token"
    EXPIRED_TOKEN = "expired_token"


DEFAULT_MESSAGES: dict[AuthErrorKind, str] = {
    AuthErrorKind.USER_ALREADY_EXISTS: "User already exists",
    AuthErrorKind.USER_NOT_FOUND: "User not found",
    AuthErrorKind.INVALID_CREDENTIALS: "Invalid credentials",
    AuthErrorKind.INVALID_TOKEN: "Invalid refresh token",
    AuthErrorKind.EXPIRED_TOKEN: "Refresh token expired",
}


@dataclass(frozen=True)
class AuthError:
    """An expected, caller-recoverable failure. Callers branch on kind."""

    kind: AuthErrorKind
    message: str = ""

    def __post_init__(self) -> None:
        if not self.message:
            object.__setattr__(self, "message", DEFAULT_MESSAGES[self.kind])
