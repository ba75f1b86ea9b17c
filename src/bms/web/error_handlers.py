import structlog
from fastapi import Request
from fastapi.responses import JSONResponse, Response

from bms.errors import ConflictError, NotFoundError, SequenceExhaustedError, StoreUnavailableError, ValidationError

logger = structlog.get_logger(__name__)


def create_json_error_response(status_code: int, message: str, error_type: str | None = None) -> JSONResponse:
    """Create JSON error response with optional type for machine parsing."""
    content = {"message": message}
    if error_type:
        content["type"] = error_type
    return JSONResponse(status_code=status_code, content=content)


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Map UserError subclasses to status codes.

    Allocation failures (503) and uniqueness conflicts (409) get their own types
    so clients can offer a retry instead of treating them as bad input.
    """
    if isinstance(exc, NotFoundError):
        status_code, error_type = 404, "not_found"
    elif isinstance(exc, ValidationError):
        status_code, error_type = 400, "validation_error"
    elif isinstance(exc, ConflictError):
        status_code, error_type = 409, "conflict"
    elif isinstance(exc, SequenceExhaustedError):
        status_code, error_type = 503, "sequence_exhausted"
    else:
        status_code, error_type = 400, "bad_request"

    return create_json_error_response(status_code=status_code, message=str(exc), error_type=error_type)


async def store_unavailable_handler(_: Request, exc: Exception) -> Response:
    """Counter store failures are retryable by the client but their details stay in the logs."""
    logger.error("store_unavailable", error=str(exc), cause=repr(exc.__cause__))
    return create_json_error_response(
        status_code=503, message="Storage is temporarily unavailable.", error_type="store_unavailable"
    )


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("unexpected_error", error=str(exc))
    return create_json_error_response(
        status_code=500, message="An unexpected error occurred.", error_type="internal_server_error"
    )
