"""
User Model

Represents a user who can log in and run authenticated mutations.

Users carry no password column: every account shares the configured
login password (see Settings.login_password).
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from library_api.database import Base

USERNAME_MIN_LENGTH = 5


class User(Base):
    """
    User model representing registered users in the system.

    Table: users

    Constraints:
    - username: unique, at least USERNAME_MIN_LENGTH characters

    Example:
        user = User(username="alice", favorite_genre="Fantasy")
        db.add(user)
        db.commit()
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)

    username: Mapped[str] = mapped_column(
        Text,
        unique=True,
        index=True,
        nullable=False,
        comment="Unique login name"
    )

    favorite_genre: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Genre used by clients for recommendations"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint(
            f"length(username) >= {USERNAME_MIN_LENGTH}",
            name="ck_users_username_length",
        ),
    )

    def __repr__(self) -> str:
        return f"User(id={self.id}, username='{self.username}')"
