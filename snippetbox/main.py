"""Application factory.

``create_app`` wires the stores, the template cache, the process-wide
middleware chain and the route table into a FastAPI application.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware import Middleware

from snippetbox.core.config import Settings, settings as default_settings
from snippetbox.core.limiter import limiter
from snippetbox.core.middleware import LogRequestMiddleware, RecoverPanicMiddleware
from snippetbox.core.security import AuthenticationRequired, CommonHeadersMiddleware
from snippetbox.core.sessions import SessionMiddleware
from snippetbox.core.templates import PACKAGE_DIR, new_template_cache
from snippetbox.core.utils.session_store import MemorySessionStore, SessionStore, SQLSessionStore
from snippetbox.db.init_db import init_database
from snippetbox.db.repositories import (
    SnippetModel,
    SnippetModelInterface,
    UserModel,
    UserModelInterface,
)
from snippetbox.db.session import make_session_factory, open_db
from snippetbox.web.routes import routers

logger = logging.getLogger(__name__)

STATIC_DIR = PACKAGE_DIR / "static"


async def _authentication_required_handler(request: Request, exc: AuthenticationRequired):
    return RedirectResponse(exc.login_url, status_code=303)


async def _http_exception_handler(request: Request, exc: StarletteHTTPException):
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)


async def _validation_exception_handler(request: Request, exc: RequestValidationError):
    return PlainTextResponse("Bad Request", status_code=400)


async def _sweep_expired_sessions(store: SessionStore, interval: float) -> None:
    while True:
        await asyncio.sleep(interval)
        try:
            removed = await run_in_threadpool(store.delete_expired)
        except Exception as e:
            logger.error("Expired session cleanup failed: %s", e)
            continue
        if removed:
            logger.debug("Removed expired sessions", extra={"count": removed})


def create_app(
    settings: Optional[Settings] = None,
    *,
    snippets: Optional[SnippetModelInterface] = None,
    users: Optional[UserModelInterface] = None,
    session_store: Optional[SessionStore] = None,
) -> FastAPI:
    """Build the application.

    Any store passed in is used as-is; the rest are created on top of a
    single engine for ``settings.db_dsn``. The template cache is compiled
    here, so a broken template fails before the server starts listening.
    """
    settings = settings or default_settings

    engine = None
    if snippets is None or users is None or (session_store is None and settings.session_store == "sql"):
        engine = open_db(settings.db_dsn)
        session_factory = make_session_factory(engine)
        snippets = snippets or SnippetModel(session_factory)
        users = users or UserModel(session_factory)
        if session_store is None and settings.session_store == "sql":
            session_store = SQLSessionStore(session_factory)
    if session_store is None:
        session_store = MemorySessionStore()

    templates = new_template_cache()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("starting server", extra={"addr": settings.addr, "env": settings.env})
        if engine is not None:
            await run_in_threadpool(init_database, engine)

        cleanup = None
        if settings.session_cleanup_interval > 0:
            cleanup = asyncio.create_task(
                _sweep_expired_sessions(session_store, settings.session_cleanup_interval)
            )
        try:
            yield
        finally:
            if cleanup is not None:
                cleanup.cancel()
                try:
                    await cleanup
                except asyncio.CancelledError:
                    pass
            if engine is not None:
                engine.dispose()
            logger.info("server stopped cleanly")

    # First entry is the outermost layer
    middleware = [
        Middleware(RecoverPanicMiddleware, debug=settings.debug),
        Middleware(LogRequestMiddleware),
        Middleware(CommonHeadersMiddleware),
        Middleware(
            SessionMiddleware,
            store=session_store,
            cookie_name=settings.session_cookie,
            lifetime=timedelta(hours=settings.session_lifetime_hours),
            secure=settings.secure_cookies,
        ),
    ]

    app = FastAPI(
        title=settings.app_name,
        debug=settings.debug,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        middleware=middleware,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.snippets = snippets
    app.state.users = users
    app.state.session_store = session_store
    app.state.templates = templates
    # Attach limiter to app.state for the @limiter.limit() decorators
    app.state.limiter = limiter

    app.add_exception_handler(AuthenticationRequired, _authentication_required_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
    for router in routers():
        app.include_router(router)

    logger.info(
        "Rate limiting initialized with configuration: auth=%s",
        settings.rate_limit_auth_endpoints,
    )
    return app
