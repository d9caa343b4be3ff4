"""Snippet view and create routes"""

from typing import Optional

from fastapi import Depends, Form, Request
from starlette.responses import Response

from snippetbox.core.validator import max_chars, not_blank, permitted_value
from snippetbox.db.repositories import NoRecordError, PersistenceError, SnippetModelInterface
from snippetbox.web.dependencies import get_snippets
from snippetbox.web.forms import PERMITTED_EXPIRES, SnippetCreateForm
from snippetbox.web.helpers import (
    client_error,
    flash,
    new_template_data,
    not_found,
    redirect,
    render,
    server_error,
)

# Largest value an INTEGER primary key column can hold
MAX_ID = 2**63 - 1


def parse_id(value: str) -> Optional[int]:
    """Plain ASCII decimal digits in 1..MAX_ID, else None."""
    if not value.isascii() or not value.isdigit():
        return None
    number = int(value)
    if number < 1 or number > MAX_ID:
        return None
    return number


def snippet_view(
    request: Request,
    snippet_id: str,
    snippets: SnippetModelInterface = Depends(get_snippets),
) -> Response:
    """Show one snippet. Any id that is not a positive integer is simply not found."""
    pk = parse_id(snippet_id)
    if pk is None:
        return not_found()

    try:
        snippet = snippets.get(pk)
    except NoRecordError:
        return not_found()
    except PersistenceError as e:
        return server_error(request, e)

    data = new_template_data(request)
    data.snippet = snippet
    return render(request, 200, "view.html", data)


def snippet_create(request: Request) -> Response:
    data = new_template_data(request)
    data.form = SnippetCreateForm(expires=365)
    return render(request, 200, "create.html", data)


def snippet_create_post(
    request: Request,
    title: str = Form(""),
    content: str = Form(""),
    expires: str = Form(""),
    snippets: SnippetModelInterface = Depends(get_snippets),
) -> Response:
    try:
        expires_days = int(expires)
    except ValueError:
        return client_error(400)

    form = SnippetCreateForm(title=title, content=content, expires=expires_days)
    form.check_field(not_blank(form.title), "title", "This field cannot be blank")
    form.check_field(
        max_chars(form.title, 100), "title", "This field cannot be more than 100 characters long"
    )
    form.check_field(not_blank(form.content), "content", "This field cannot be blank")
    form.check_field(
        max_chars(form.content, 250), "content", "This field cannot be more than 250 characters long"
    )
    form.check_field(
        permitted_value(form.expires, *PERMITTED_EXPIRES), "expires", "This field must equal 1, 7 or 365"
    )

    if not form.valid:
        data = new_template_data(request)
        data.form = form
        return render(request, 422, "create.html", data)

    try:
        snippet_id = snippets.insert(form.title, form.content, form.expires)
    except PersistenceError as e:
        return server_error(request, e)

    flash(request, "Snippet successfully created!")
    return redirect(f"/snippet/view/{snippet_id}")
