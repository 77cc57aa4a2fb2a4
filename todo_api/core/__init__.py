"""Core Layer — pure domain logic, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Entities are immutable; every change yields a new validated instance

Design Decisions:
    - Functional core separated from imperative shell: workflows orchestrate IO
      around the entities, entities never call out
"""
