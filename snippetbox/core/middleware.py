"""Process-wide middleware: panic recovery and request logging."""

import logging
import traceback
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.types import ASGIApp

from snippetbox.core.security import SECURITY_HEADERS
from snippetbox.core.utils.logging_config import set_correlation_id

logger = logging.getLogger(__name__)


def request_uri(request: Request) -> str:
    """Path plus query string, as the client sent it."""
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


class RecoverPanicMiddleware(BaseHTTPMiddleware):
    """
    Outermost middleware: turns any exception raised further down the chain
    into a logged 500 response so one bad request cannot take the server down.
    """

    def __init__(self, app: ASGIApp, debug: bool = False):
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            logger.error(
                "Unhandled exception: %s",
                e,
                exc_info=e,
                extra={"method": request.method, "uri": request_uri(request)},
            )
            body = "Internal Server Error"
            if self.debug:
                body = "".join(traceback.format_exception(type(e), e, e.__traceback__))
            # Exceptions bypass CommonHeadersMiddleware
            headers = dict(SECURITY_HEADERS)
            # Tell the server to close the connection after this response
            headers["Connection"] = "close"
            return PlainTextResponse(body, status_code=500, headers=headers)


class LogRequestMiddleware(BaseHTTPMiddleware):
    """Logs every request before handing it on and tags it with a correlation ID."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        set_correlation_id(request.headers.get("X-Request-ID") or str(uuid.uuid4()))
        logger.info(
            "received request",
            extra={
                "ip": request.client.host if request.client else None,
                "proto": f"HTTP/{request.scope.get('http_version', '1.1')}",
                "method": request.method,
                "uri": request_uri(request),
            },
        )
        return await call_next(request)
