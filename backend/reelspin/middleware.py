"""Maps machine errors raised by trigger handlers to HTTP responses."""
import logging

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from reelspin.errors import ErrorCode, GameError


logger = logging.getLogger(__name__)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Turn a rejected trigger into its error body.

    GameError subclasses (SESSION_BUSY, INSUFFICIENT_FUNDS, ...) carry their
    own status. Anything else means the machine itself failed and becomes
    INTERNAL_ERROR.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except GameError as e:
            logger.info(
                "%s %s rejected: %s", request.method, request.url.path, e.code.value
            )
            return e.to_response()
        except Exception as e:
            logger.exception(
                "Machine failure on %s %s", request.method, request.url.path
            )
            return GameError(ErrorCode.INTERNAL_ERROR, str(e)).to_response()
