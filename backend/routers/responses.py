"""
Error responses shared by all routers.

Every handler has one catch boundary: an empty feed is the client's
problem (400), anything else is returned as a 500 with the raw traceback.
"""
import logging
import traceback

from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

EMPTY_FEED_MESSAGE = "No items found in RSS feed"


def empty_feed_response() -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": EMPTY_FEED_MESSAGE})


def error_response(message: str, exc: BaseException, status_code: int = 500) -> JSONResponse:
    """Log the failure and return it to the client with full detail."""
    logger.exception(f"{message}: {exc}")
    details = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "details": details},
    )
