"""Response helpers shared by the handlers."""

import logging
import traceback
from datetime import datetime
from http import HTTPStatus

from fastapi import Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from jinja2 import TemplateError
from starlette.responses import Response

from snippetbox.core.middleware import request_uri
from snippetbox.core.security import get_csrf_token
from snippetbox.core.templates import TemplateCache, TemplateData, TemplateNotCachedError

logger = logging.getLogger(__name__)

FLASH_SESSION_KEY = "flash"


def server_error(request: Request, error: BaseException) -> Response:
    """Log ``error`` with the request context and send a generic 500."""
    logger.error(
        "%s",
        error,
        exc_info=error,
        extra={"method": request.method, "uri": request_uri(request)},
    )
    body = HTTPStatus.INTERNAL_SERVER_ERROR.phrase
    if request.app.state.settings.debug:
        body = "".join(traceback.format_exception(type(error), error, error.__traceback__))
    return PlainTextResponse(body, status_code=500)


def client_error(status_code: int) -> Response:
    """Plain-text response carrying the reason phrase for ``status_code``."""
    return PlainTextResponse(HTTPStatus(status_code).phrase, status_code=status_code)


def not_found() -> Response:
    return client_error(404)


def redirect(url: str) -> RedirectResponse:
    """303 See Other, so the browser follows up with a GET."""
    return RedirectResponse(url, status_code=303)


def is_authenticated(request: Request) -> bool:
    return getattr(request.state, "is_authenticated", False)


def flash(request: Request, message: str) -> None:
    request.session[FLASH_SESSION_KEY] = message


def new_template_data(request: Request) -> TemplateData:
    return TemplateData(
        current_year=datetime.now().year,
        flash=request.session.pop_string(FLASH_SESSION_KEY),
        is_authenticated=is_authenticated(request),
        csrf_token=get_csrf_token(request),
    )


def render(request: Request, status_code: int, page: str, data: TemplateData) -> Response:
    """Render ``page`` fully before sending so a template failure becomes a clean 500."""
    templates: TemplateCache = request.app.state.templates
    try:
        body = templates.render(page, data)
    except (TemplateNotCachedError, TemplateError) as e:
        return server_error(request, e)
    return HTMLResponse(body, status_code=status_code)
