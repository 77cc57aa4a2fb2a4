"""Pydantic Schemas — request DTOs and response envelopes for the RPC procedures.

Invariants:
    - Request DTOs validate at the system boundary using the same field rules as
      the entities (core/field_rules.py)
    - Request DTOs ignore unknown keys: the route attaches actor_id / actor_role
    - User views never carry password

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
    - Views built from entities via from_attributes, so redaction is structural
"""
