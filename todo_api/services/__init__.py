"""Services Layer — application workflows orchestrating entities and repositories.

Invariants:
    - Workflows take raw payloads, decode them, and return entities
    - Workflows never touch SQLAlchemy; persistence goes through repository Protocols

Design Decisions:
    - One workflow class per entity, constructed explicitly with its repository
"""
