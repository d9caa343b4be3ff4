"""Home page and liveness routes"""

from fastapi import Depends, Request
from fastapi.responses import PlainTextResponse
from starlette.responses import Response

from snippetbox.db.repositories import PersistenceError, SnippetModelInterface
from snippetbox.web.dependencies import get_snippets
from snippetbox.web.helpers import new_template_data, render, server_error


def home(request: Request, snippets: SnippetModelInterface = Depends(get_snippets)) -> Response:
    """Latest snippets"""
    try:
        latest = snippets.latest()
    except PersistenceError as e:
        return server_error(request, e)

    data = new_template_data(request)
    data.snippets = latest
    return render(request, 200, "home.html", data)


def ping() -> Response:
    """Liveness check"""
    return PlainTextResponse("OK")
