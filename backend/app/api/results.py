"""Translate service errors into ``ActionResult`` responses."""
from fastapi import status
from fastapi.responses import JSONResponse

from app.errors import DependencyConflict, RecordNotFound
from app.schemas.common import ActionResult


def action_error(exc: DependencyConflict | RecordNotFound) -> JSONResponse:
    status_code = (
        status.HTTP_409_CONFLICT if isinstance(exc, DependencyConflict) else status.HTTP_404_NOT_FOUND
    )
    result = ActionResult(success=False, message=exc.message)
    return JSONResponse(status_code=status_code, content=result.model_dump())
