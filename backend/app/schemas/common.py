"""Shared response schemas."""
from pydantic import BaseModel


class ActionResult(BaseModel):
    """Outcome of an in-page mutating action."""

    success: bool
    message: str
    id: str | None = None
