"""API Layer — FastAPI routes, bearer authentication, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON envelopes

Design Decisions:
    - Thin routes delegate to workflows: authenticate, attach actor, call, project
"""
