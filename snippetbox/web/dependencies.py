"""Route-group dependencies.

The two ordered chains below are applied to whole route groups in
``snippetbox.web.routes``: ``DYNAMIC`` for pages that need the session,
CSRF protection and the authentication flag, ``PROTECTED`` for pages that
also require a logged-in user.
"""

from typing import List

from fastapi import Depends, Request
from fastapi.params import Depends as DependsParam

from snippetbox.core.security import AuthenticationRequired, verify_csrf_token
from snippetbox.db.repositories import SnippetModelInterface, UserModelInterface

AUTH_SESSION_KEY = "authenticated_user_id"


def get_snippets(request: Request) -> SnippetModelInterface:
    return request.app.state.snippets


def get_users(request: Request) -> UserModelInterface:
    return request.app.state.users


def authenticate(request: Request) -> None:
    """Flag the request as authenticated when its session holds an existing user's id."""
    request.state.is_authenticated = False

    user_id = request.session.get(AUTH_SESSION_KEY)
    if user_id is None:
        return

    users: UserModelInterface = request.app.state.users
    if users.exists(user_id):
        request.state.is_authenticated = True


def require_authentication(request: Request) -> None:
    """Stop the chain and send the user to the login page unless authenticated."""
    if not getattr(request.state, "is_authenticated", False):
        raise AuthenticationRequired("/user/login")


DYNAMIC: List[DependsParam] = [
    Depends(verify_csrf_token),
    Depends(authenticate),
]

PROTECTED: List[DependsParam] = DYNAMIC + [
    Depends(require_authentication),
]
