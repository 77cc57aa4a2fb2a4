"""Bearer Authentication — token parsing, actor extraction, token issuing.

Invariants:
    - Missing header, non-Bearer scheme, undecodable token, or a payload without
      a well-formed user id → AuthenticationError (401)
    - Payloads are decoded WITHOUT signature verification; issued tokens are unsigned
      (alg "none"); this layer identifies the caller, it does not prove identity
    - User id read from sub, then user_id, userId, id (first present wins)
    - role is "assignee" unless the payload says "admin"

Design Decisions:
    - PyJWT over manual base64 splitting: header/payload parsing and error
      types for free, verification switched off explicitly
    - Actor attached to the raw payload as actor_id / actor_role before the
      workflow decodes it; DTOs ignore those keys
"""

import logging
import re
from dataclasses import dataclass
from typing import Any

import jwt
from fastapi import Header

from todo_api.core.domain_types import ActorRole, UserId
from todo_api.core.errors import AuthenticationError, ValidationError
from todo_api.core.field_rules import make_user_id

logger = logging.getLogger(__name__)

BEARER_PATTERN = re.compile(r"^Bearer\s+(.+)$", re.IGNORECASE)
USER_ID_CLAIMS = ("sub", "user_id", "userId", "id")


@dataclass(frozen=True)
class Actor:
    """The authenticated caller of a procedure."""
    id: UserId
    role: ActorRole = ActorRole.ASSIGNEE
    email: str | None = None


def extract_bearer_token(header: str | None) -> str | None:
    if not header:
        return None
    match = BEARER_PATTERN.match(header.strip())
    return match.group(1) if match else None


def parse_token(token: str) -> Actor:
    """Decode an unverified token into an Actor."""
    try:
        claims = jwt.decode(token, options={"verify_signature": False})
    except jwt.InvalidTokenError as e:
        raise AuthenticationError("Invalid token") from e

    raw_id = next(
        (claims[key] for key in USER_ID_CLAIMS if claims.get(key)), None,
    )
    if raw_id is None:
        raise AuthenticationError("Token carries no user id")
    try:
        user_id = make_user_id(raw_id)
    except ValidationError as e:
        raise AuthenticationError("Token carries an invalid user id") from e

    try:
        role = ActorRole(claims.get("role") or ActorRole.ASSIGNEE)
    except ValueError as e:
        raise AuthenticationError("Token carries an unknown role") from e

    email = claims.get("email")
    return Actor(
        id=user_id, role=role, email=email if isinstance(email, str) else None,
    )


def generate_token(
    user_id: UserId, email: str | None = None,
    role: ActorRole = ActorRole.ASSIGNEE,
) -> str:
    """Issue an unsigned token identifying user_id."""
    payload: dict[str, Any] = {"sub": user_id, "role": ActorRole(role).value}
    if email is not None:
        payload["email"] = email
    return jwt.encode(payload, None, algorithm="none")


async def get_actor(authorization: str | None = Header(default=None)) -> Actor:
    """FastAPI dependency: the caller identified by the Authorization header."""
    token = extract_bearer_token(authorization)
    if token is None:
        raise AuthenticationError()
    actor = parse_token(token)
    logger.debug("Actor authenticated", extra={"actor_id": actor.id})
    return actor


def with_actor(payload: Any, actor: Actor) -> Any:
    """Raw payload plus actor_id / actor_role; non-object payloads pass through as-is."""
    if not isinstance(payload, dict):
        return payload
    return {**payload, "actor_id": actor.id, "actor_role": actor.role.value}
