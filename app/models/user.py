"""ORM model for application users."""

from sqlalchemy import Column, Integer, String

from app.models.base import Base

DEFAULT_ROLE = "USER"


class User(Base):
    """
    User account for password login and JWT access tokens.

    username and email are each unique across all users. role defaults to 'USER'.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=DEFAULT_ROLE)
