"""
Security tests for CSRF protection on state-changing requests
"""

import pytest
from fastapi.testclient import TestClient

from tests.utils.helpers import extract_csrf_token, login


class TestCSRFProtection:
    @pytest.mark.parametrize("path", ["/user/login", "/user/signup"])
    def test_post_without_session_is_rejected(self, client, path):
        response = client.post(path, data={"email": "alice@example.com", "password": "pa$$word"})

        assert response.status_code == 403

    def test_post_without_token_is_rejected(self, client):
        client.get("/user/login")

        response = client.post("/user/login", data={"email": "alice@example.com", "password": "pa$$word"})

        assert response.status_code == 403

    @pytest.mark.parametrize("token", ["", "invalid-token", "expired-token-12345"])
    def test_post_with_wrong_token_is_rejected(self, client, token):
        client.get("/user/login")

        response = client.post(
            "/user/login",
            data={"email": "alice@example.com", "password": "pa$$word", "csrf_token": token},
        )

        assert response.status_code == 403

    def test_token_in_header_is_accepted(self, client):
        token = extract_csrf_token(client.get("/user/login").text)

        response = client.post(
            "/user/login",
            data={"email": "alice@example.com", "password": "pa$$word"},
            headers={"X-CSRF-Token": token},
        )

        assert response.status_code == 303

    def test_protected_route_checks_token(self, client):
        login(client)

        response = client.post("/snippet/create", data={"title": "t", "content": "c", "expires": "7"})

        assert response.status_code == 403

    def test_token_is_bound_to_session(self, client, app):
        token = extract_csrf_token(client.get("/user/login").text)

        with TestClient(app, follow_redirects=False) as other:
            other.get("/user/login")
            response = other.post(
                "/user/login",
                data={"email": "alice@example.com", "password": "pa$$word", "csrf_token": token},
            )

        assert response.status_code == 403
