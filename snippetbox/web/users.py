"""Signup, login and logout routes"""

from fastapi import Depends, Form, Request
from starlette.responses import Response

from snippetbox.core.config import settings
from snippetbox.core.limiter import limiter
from snippetbox.core.validator import EMAIL_RX, matches, min_chars, not_blank
from snippetbox.db.repositories import (
    DuplicateEmailError,
    InvalidCredentialsError,
    PersistenceError,
    UserModelInterface,
)
from snippetbox.web.dependencies import AUTH_SESSION_KEY, get_users
from snippetbox.web.forms import UserLoginForm, UserSignupForm
from snippetbox.web.helpers import flash, new_template_data, redirect, render, server_error


def user_signup(request: Request) -> Response:
    data = new_template_data(request)
    data.form = UserSignupForm()
    return render(request, 200, "signup.html", data)


@limiter.limit(settings.rate_limit_auth_endpoints)
def user_signup_post(
    request: Request,
    name: str = Form(""),
    email: str = Form(""),
    password: str = Form(""),
    users: UserModelInterface = Depends(get_users),
) -> Response:
    form = UserSignupForm(name=name, email=email, password=password)
    form.check_field(not_blank(form.name), "name", "This field cannot be blank")
    form.check_field(not_blank(form.email), "email", "This field cannot be blank")
    form.check_field(matches(form.email, EMAIL_RX), "email", "This field must be a valid email address")
    form.check_field(not_blank(form.password), "password", "This field cannot be blank")
    form.check_field(min_chars(form.password, 8), "password", "This field must be at least 8 characters long")

    if form.valid:
        try:
            users.insert(form.name, form.email, form.password)
        except DuplicateEmailError:
            form.add_field_error("email", "Email address is already in use")
        except PersistenceError as e:
            return server_error(request, e)

    if not form.valid:
        data = new_template_data(request)
        data.form = form
        return render(request, 422, "signup.html", data)

    flash(request, "Your signup was successful. Please log in.")
    return redirect("/user/login")


def user_login(request: Request) -> Response:
    data = new_template_data(request)
    data.form = UserLoginForm()
    return render(request, 200, "login.html", data)


@limiter.limit(settings.rate_limit_auth_endpoints)
def user_login_post(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    users: UserModelInterface = Depends(get_users),
) -> Response:
    form = UserLoginForm(email=email, password=password)
    form.check_field(not_blank(form.email), "email", "This field cannot be blank")
    form.check_field(matches(form.email, EMAIL_RX), "email", "This field must be a valid email address")
    form.check_field(not_blank(form.password), "password", "This field cannot be blank")

    user_id = None
    if form.valid:
        try:
            user_id = users.authenticate(form.email, form.password)
        except InvalidCredentialsError:
            form.add_non_field_error("Email or password is incorrect")
        except PersistenceError as e:
            return server_error(request, e)

    if not form.valid:
        data = new_template_data(request)
        data.form = form
        return render(request, 422, "login.html", data)

    # New token on privilege change to prevent session fixation
    request.session.renew_token()
    request.session[AUTH_SESSION_KEY] = user_id
    return redirect("/snippet/create")


def user_logout_post(request: Request) -> Response:
    request.session.renew_token()
    request.session.pop(AUTH_SESSION_KEY, None)
    flash(request, "You've been logged out successfully!")
    return redirect("/")
