"""Password hashing and JWT access-token issuance/verification."""

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt

if TYPE_CHECKING:
    from app.core.config import Settings

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12
# bcrypt only reads the first 72 bytes of input.
BCRYPT_MAX_BYTES = 72

# Min/max lengths for username, email and password validation.
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
EMAIL_MAX_LEN = 255
PASSWORD_MIN_LEN = 1
PASSWORD_MAX_LEN = 128

DEFAULT_ISSUER = "league-auth-service"
DEFAULT_ALGORITHM = "HS256"
DEFAULT_ACCESS_TOKEN_LIFETIME = timedelta(hours=1)

# Claims every access token must carry; anything less is treated as malformed.
REQUIRED_CLAIMS = ["sub", "role", "iat", "exp"]


class PasswordEncoder:
    """One-way, randomly salted password hashing backed by bcrypt."""

    def __init__(self, rounds: int = BCRYPT_ROUNDS) -> None:
        self.rounds = rounds

    def hash(self, plain_password: str) -> str:
        """Hash a plain-text password for storage. Do not store plain passwords."""
        pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def matches(self, plain_password: str, hashed: str) -> bool:
        """Verify a plain password against a stored hash. Unparseable hashes never match."""
        pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        try:
            return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
        except (ValueError, TypeError):
            return False


class TokenError(Exception):
    """Base class for access-token verification failures."""


class TokenSignatureError(TokenError):
    """Signature does not verify against the signing key."""


class TokenMalformedError(TokenError):
    """Token cannot be parsed, or its claims are not the ones this service issues."""


class TokenExpiredError(TokenError):
    """Token signature is valid but its exp claim is in the past."""


class TokenIssuer:
    """
    Creates and verifies signed, self-contained access tokens (compact JWS).

    Payload carries sub (username), role, iss, iat and exp, so verification needs
    no storage lookup.
    """

    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = DEFAULT_ALGORITHM,
        issuer: str = DEFAULT_ISSUER,
        expires_in: timedelta = DEFAULT_ACCESS_TOKEN_LIFETIME,
    ) -> None:
        if not secret:
            raise ValueError("secret must be non-empty")
        self._secret = secret
        self.algorithm = algorithm
        self.issuer = issuer
        self.expires_in = expires_in

    @classmethod
    def from_settings(cls, settings: "Settings") -> "TokenIssuer":
        return cls(
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            issuer=settings.JWT_ISSUER,
            expires_in=timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
        )

    def issue(self, subject: str, role: str) -> str:
        """Create a signed access token for subject (username) with the given role."""
        now = datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": subject,
            "role": role,
            "iss": self.issuer,
            "iat": now,
            "exp": now + self.expires_in,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def validate(self, token: str, expected_subject: str) -> bool:
        """
        Return True if token is genuine, unexpired and issued to expected_subject.
        Returns False only on subject mismatch; every other failure raises a TokenError.
        """
        return self.extract_claims(token).get("sub") == expected_subject

    def extract_claims(self, token: str) -> dict[str, Any]:
        """
        Decode and verify token; return its payload.
        Raises TokenSignatureError, TokenExpiredError or TokenMalformedError.
        """
        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Access token expired") from e
        except jwt.InvalidSignatureError as e:
            raise TokenSignatureError("Access token signature is invalid") from e
        except jwt.InvalidTokenError as e:
            raise TokenMalformedError(f"Access token is malformed: {e}") from e

    def extract_subject(self, token: str) -> str:
        return self.extract_claims(token)["sub"]

    def extract_role(self, token: str) -> str:
        return self.extract_claims(token)["role"]

    def extract_expiry(self, token: str) -> datetime:
        return datetime.fromtimestamp(self.extract_claims(token)["exp"], tz=UTC)

    def extract_issued_at(self, token: str) -> datetime:
        return datetime.fromtimestamp(self.extract_claims(token)["iat"], tz=UTC)
