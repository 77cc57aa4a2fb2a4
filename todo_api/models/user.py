"""User ORM — persisted shape of the User entity.

Invariants:
    - id is a lowercase UUID string primary key, assigned by the domain (no server default)
    - email is NOT unique at the schema level
    - password stored as given; nothing here hashes or redacts it

Design Decisions:
    - Uuid(as_uuid=False): rows hand back str ids, same shape as UserId
    - No relationship to tasks: tasks.assignee_id is a plain column
"""

from datetime import datetime

from sqlalchemy import String, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from todo_api.db.base import Base


class UserModel(Base):
    """users table."""
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
