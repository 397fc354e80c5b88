"""SQLAlchemy implementation of UserStore."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import User
from app.repositories.base import DuplicateRecordError

logger = logging.getLogger(__name__)


class UserRepository:
    """User lookups and inserts over a request-scoped Session. Commits per write."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def find_by_username(self, username: str) -> User | None:
        return self._session.query(User).filter(User.username == username).first()

    def find_by_email(self, email: str) -> User | None:
        return self._session.query(User).filter(User.email == email).first()

    def find_by_id(self, user_id: int) -> User | None:
        return self._session.get(User, user_id)

    def save(self, user: User) -> User:
        self._session.add(user)
        try:
            self._session.commit()
        except IntegrityError as e:
            self._session.rollback()
            raise DuplicateRecordError("username or email already taken") from e
        self._session.refresh(user)
        logger.debug("Saved user id=%s", user.id)
        return user
