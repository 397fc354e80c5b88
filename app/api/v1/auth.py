"""Register, login and refresh endpoints plus the bearer-token dependency (get_current_user)."""

from functools import lru_cache
from typing import Annotated, NoReturn

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.database import get_db
from app.core.security import PasswordEncoder, TokenError, TokenExpiredError, TokenIssuer
from app.repositories import RefreshTokenRepository, UserRepository
from app.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    MessageResponse,
    RefreshRequest,
    RegisterRequest,
)
from app.services.auth import AuthService, AuthTokens
from app.services.errors import AuthError, AuthErrorKind
from app.services.refresh_tokens import RefreshTokenManager

router = APIRouter()
security = HTTPBearer(auto_error=False)

ERROR_KIND_TO_STATUS: dict[AuthErrorKind, int] = {
    AuthErrorKind.USER_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    AuthErrorKind.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    AuthErrorKind.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    AuthErrorKind.INVALID_TOKEN: status.HTTP_401_UNAUTHORIZED,
    AuthErrorKind.EXPIRED_TOKEN: status.HTTP_401_UNAUTHORIZED,
}


@lru_cache
def get_password_encoder() -> PasswordEncoder:
    return PasswordEncoder(rounds=get_settings().BCRYPT_ROUNDS)


@lru_cache
def get_token_issuer() -> TokenIssuer:
    return TokenIssuer.from_settings(get_settings())


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
    passwords: Annotated[PasswordEncoder, Depends(get_password_encoder)],
    tokens: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> AuthService:
    """Dependency: AuthService wired to request-scoped repositories."""
    return AuthService(
        users=UserRepository(db),
        passwords=passwords,
        tokens=tokens,
        refresh_tokens=RefreshTokenManager(RefreshTokenRepository(db)),
    )


def _raise_for(error: AuthError) -> NoReturn:
    headers = None
    if ERROR_KIND_TO_STATUS[error.kind] == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    raise HTTPException(
        status_code=ERROR_KIND_TO_STATUS[error.kind],
        detail=error.message,
        headers=headers,
    )


def _to_response(tokens: AuthTokens) -> AuthResponse:
    return AuthResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        role=tokens.role,
    )


@router.post("/register", response_model=MessageResponse)
def register(
    body: RegisterRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> MessageResponse:
    """Create an account with role USER. No tokens are issued; call /login next."""
    error = service.register(body.username, body.email, body.password)
    if error is not None:
        _raise_for(error)
    return MessageResponse(message="User registered")


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """
    Authenticate with username and password; returns access and refresh tokens.
    Include the access token in the Authorization header as: Bearer <access_token>
    """
    result = service.login(body.username, body.password)
    if isinstance(result, AuthError):
        _raise_for(result)
    return _to_response(result)


@router.post("/refresh", response_model=AuthResponse)
def refresh(
    body: RefreshRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """Exchange a refresh token for a new access token. The refresh token is returned unchanged."""
    result = service.refresh_token(body.refresh_token)
    if isinstance(result, AuthError):
        _raise_for(result)
    return _to_response(result)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> CurrentUser:
    """Dependency: require valid Bearer JWT and return the current user. Raises 401 if missing or invalid."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        username = tokens.extract_subject(credentials.credentials)
    except TokenExpiredError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except TokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    user = UserRepository(db).find_by_username(username)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return CurrentUser.model_validate(user)


@router.get("/me", response_model=CurrentUser)
def read_current_user(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Return the user the bearer token was issued to."""
    return current_user
