"""ORM Models — SQLAlchemy declarative models for the persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Columns map 1:1 to the serialized entity records (no extra, no missing)

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all
      or alembic autogenerate runs
"""

from todo_api.models.user import UserModel  # noqa: F401
from todo_api.models.task import TaskModel  # noqa: F401
