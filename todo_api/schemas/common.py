"""Shared response envelopes."""

from pydantic import BaseModel


class RemoveResponse(BaseModel):
    """Envelope for remove procedures: the id that was deleted."""
    success: bool = True
    id: str
