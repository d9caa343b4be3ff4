"""Route table.

Every route the application serves is declared here, grouped by the chain
of dependencies it runs behind.
"""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from snippetbox.web import home, snippets, users
from snippetbox.web.dependencies import DYNAMIC, PROTECTED

# No session or CSRF checks
public = APIRouter()
public.add_api_route("/ping", home.ping, methods=["GET"], include_in_schema=False)

# Session, CSRF and authentication flag
dynamic = APIRouter(dependencies=DYNAMIC, default_response_class=HTMLResponse)
dynamic.add_api_route("/", home.home, methods=["GET"])
dynamic.add_api_route("/snippet/view/{snippet_id}", snippets.snippet_view, methods=["GET"])
dynamic.add_api_route("/user/signup", users.user_signup, methods=["GET"])
dynamic.add_api_route("/user/signup", users.user_signup_post, methods=["POST"])
dynamic.add_api_route("/user/login", users.user_login, methods=["GET"])
dynamic.add_api_route("/user/login", users.user_login_post, methods=["POST"])

# Everything in dynamic plus a logged-in user
protected = APIRouter(dependencies=PROTECTED, default_response_class=HTMLResponse)
protected.add_api_route("/snippet/create", snippets.snippet_create, methods=["GET"])
protected.add_api_route("/snippet/create", snippets.snippet_create_post, methods=["POST"])
protected.add_api_route("/user/logout", users.user_logout_post, methods=["POST"])


def routers():
    return [public, dynamic, protected]
