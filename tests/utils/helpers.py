"""
Test helper functions for common testing operations
"""

import re
from typing import Dict, Optional

from fastapi.testclient import TestClient
from httpx import Response

from tests.utils.mocks import MOCK_USER_EMAIL, MOCK_USER_PASSWORD

CSRF_TOKEN_RX = re.compile(r"<input type='hidden' name='csrf_token' value='(.+?)'>")


def extract_csrf_token(body: str) -> str:
    """Pull the CSRF token out of a rendered form"""
    match = CSRF_TOKEN_RX.search(body)
    assert match, "no CSRF token in page"
    return match.group(1)


def count_field_errors(body: str) -> int:
    return body.count("<label class='error'>")


def post_form(client: TestClient, path: str, data: Optional[Dict[str, str]] = None, form_page: Optional[str] = None) -> Response:
    """Fetch a token from ``form_page`` (defaults to ``path``) and submit ``data`` with it"""
    page = client.get(form_page or path)
    form = dict(data or {})
    form["csrf_token"] = extract_csrf_token(page.text)
    return client.post(path, data=form)


def login(client: TestClient, email: str = MOCK_USER_EMAIL, password: str = MOCK_USER_PASSWORD) -> Response:
    response = post_form(client, "/user/login", {"email": email, "password": password})
    assert response.status_code == 303, response.text
    return response
