import logging

from fastapi import HTTPException

from src.drafting.exceptions import DraftingError, InputStateError, MalformedOutputError, ProjectNotFoundError

logger = logging.getLogger(__name__)


def to_http_exception(exc: DraftingError) -> HTTPException:
    """Translate a domain error into the HTTP error a router should raise."""
    if isinstance(exc, ProjectNotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, InputStateError):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, MalformedOutputError):
        # Raw excerpt stays in the logs
        logger.error(str(exc))
        return HTTPException(status_code=502, detail=exc.user_message)
    logger.error(f"Unhandled drafting error: {exc}")
    return HTTPException(status_code=500, detail="Internal server error")
