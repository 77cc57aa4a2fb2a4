"""Infrastructure Layer — database access, repositories, and cross-cutting concerns.

Invariants:
    - Repositories implement the Protocols in core/repository_protocols.py
    - Every SQLAlchemy failure surfaces as a core/errors.py DatabaseError subclass

Design Decisions:
    - Entities in, entities out: ORM models never leave this layer
"""
