import logging

from fastapi import FastAPI
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from sns.exceptions import ErrorCode, SnsApplicationException

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application errors to HTTP responses.

    ``SnsApplicationException`` answers with the status of its error code
    and a ``{"detail", "code"}`` body; anything else is logged and answered
    with a generic 500.
    """

    @app.exception_handler(SnsApplicationException)
    async def _sns_error_handler(request: Request, exc: SnsApplicationException) -> Response:
        logger.info("%s %s failed: %s", request.method, request.url.path, exc)
        headers = {"WWW-Authenticate": "Bearer"} if exc.code is ErrorCode.INVALID_TOKEN else None
        return JSONResponse(
            status_code=exc.code.status_code,
            content=exc.to_public_dict(),
            headers=headers,
        )

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception) -> Response:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=ErrorCode.DATABASE_ERROR.status_code,
            content={"detail": "Internal Server Error", "code": ErrorCode.DATABASE_ERROR.name},
        )
