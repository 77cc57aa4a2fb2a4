"""User Repository — SQLAlchemy implementation of core.repository_protocols.UserRepository.

Invariants:
    - Passwords are stored and returned as-is; redaction happens at the route layer
"""

from todo_api.core.errors import UserMutationError, UserNotFoundError
from todo_api.core.user import User
from todo_api.infrastructure.sql_repository import SqlRepository
from todo_api.models.user import UserModel


class SqlUserRepository(SqlRepository[User]):
    model = UserModel
    entity_cls = User
    not_found_error = UserNotFoundError
    mutation_error = UserMutationError
