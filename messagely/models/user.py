"""User ORM — persists identity and hashed credentials.

Invariants:
    - username is the primary key and never changes
    - password_hash is a bcrypt digest; it never leaves the credential store
    - join_at set once at creation; last_login_at moves on each login

Design Decisions:
    - Natural key (username) over surrogate id: messages reference users by
      username, and uniqueness is enforced by the primary key itself
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from messagely.db.base import Base


class User(Base):
    """Registered user."""
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(50), primary_key=True)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    last_name: Mapped[str] = mapped_column(Text, nullable=False)
    phone: Mapped[str] = mapped_column(Text, nullable=False)
    join_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    last_login_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
