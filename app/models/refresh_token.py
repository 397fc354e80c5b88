"""ORM model for opaque, storage-backed refresh tokens."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from app.models.base import Base


class RefreshToken(Base):
    """
    Grants reissuance of access tokens for user_id until expiry_date.

    At most one live token per user: issuing deletes the user's earlier tokens first.
    """

    __tablename__ = "refresh_tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    token = Column(String(255), nullable=False, unique=True, index=True)
    expiry_date = Column(DateTime(timezone=True), nullable=False)
