"""Task ORM — persisted shape of the Task entity.

Invariants:
    - status stored as its enum value string (TODO, IN_PROGRESS, DONE)
    - description nullable; length rules enforced by the entity, not the column
    - assignee_id has NO foreign key: a task may reference a deleted or unknown user

Design Decisions:
    - created_at indexed: default sort column and date-range filter target
"""

from datetime import datetime

from sqlalchemy import String, Text, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from todo_api.db.base import Base


class TaskModel(Base):
    """tasks table."""
    __tablename__ = "tasks"

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    assignee_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False), nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
