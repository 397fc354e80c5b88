"""SQLAlchemy implementation of RefreshTokenStore."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import RefreshToken
from app.repositories.base import DuplicateRecordError

logger = logging.getLogger(__name__)


class RefreshTokenRepository:
    """Refresh token lookups, inserts and deletes over a request-scoped Session. Commits per write."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def find_by_token(self, token: str) -> RefreshToken | None:
        return self._session.query(RefreshToken).filter(RefreshToken.token == token).first()

    def save(self, refresh_token: RefreshToken) -> RefreshToken:
        self._session.add(refresh_token)
        try:
            self._session.commit()
        except IntegrityError as e:
            self._session.rollback()
            raise DuplicateRecordError("refresh token already exists") from e
        self._session.refresh(refresh_token)
        return refresh_token

    def delete(self, refresh_token: RefreshToken) -> None:
        self._session.delete(refresh_token)
        self._session.commit()

    def delete_by_user_id(self, user_id: int) -> int:
        deleted_count = (
            self._session.query(RefreshToken)
            .filter(RefreshToken.user_id == user_id)
            .delete(synchronize_session=False)
        )
        self._session.commit()
        if deleted_count > 0:
            logger.debug("Deleted %s refresh token(s) for user_id=%s", deleted_count, user_id)
        return deleted_count
