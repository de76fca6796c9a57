"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (users, tasks, liveness)
- Error handlers (centralized failure-to-envelope mapping)
- Middleware (CORS, security headers, request logging)
- Logging configuration
- Long-lived adapters (database engine, password hasher, token service)

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from todo_api.core.config import INSECURE_DEFAULT_SECRET, Settings, settings as default_settings
from todo_api.infrastructure.todo.database import build_engine, create_schema
from todo_api.infrastructure.todo.password_hasher import BcryptPasswordHasher
from todo_api.infrastructure.todo.token_service import JwtTokenService
from todo_api.interfaces.health import router as health_router
from todo_api.interfaces.todo.tasks_router import router as tasks_router
from todo_api.interfaces.todo.users_router import router as users_router
from todo_api.shared.errors.handlers import register_error_handlers
from todo_api.shared.logging import configure_logging
from todo_api.shared.request_logging import REQUEST_ID_HEADER, RequestLoggingMiddleware
from todo_api.shared.security.headers import SecurityHeadersMiddleware

logger = logging.getLogger(__name__)

API_DESCRIPTION = """
REST API for a collaborative ToDo list.

* Users register and log in to obtain a JWT bearer token.
* Tasks can be created, listed, updated, completed and deleted.

Send the token in the `Authorization: Bearer <token>` header on every
protected route.
"""


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: make sure the schema exists, release the pool on exit."""
    create_schema(app.state.engine)
    yield
    app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    This is the composition root of the application.

    Args:
        settings: Configuration to run with. Defaults to the settings
            loaded from the environment.

    Returns:
        A fully configured FastAPI application instance.
    """
    settings = settings or default_settings
    configure_logging(level=settings.log_level)

    if settings.jwt_secret == INSECURE_DEFAULT_SECRET and not settings.is_development:
        logger.warning("JWT_SECRET is not set; tokens are signed with the default secret.")

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        description=API_DESCRIPTION,
        docs_url="/api-docs",
        redoc_url="/redoc",
        servers=[{"url": url} for url in settings.server_urls],
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = build_engine(settings.database_url)
    app.state.password_hasher = BcryptPasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.token_service = JwtTokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expires_in=timedelta(days=settings.jwt_expires_days),
    )

    # --- Middleware (last added runs first) ---
    # RequestLogging is innermost: the 500 envelope it builds for unexpected
    # errors still gets the security and CORS headers.
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )

    # --- Error Handlers ---
    register_error_handlers(app, settings)

    # --- Routers ---
    app.include_router(health_router)
    app.include_router(users_router)
    app.include_router(tasks_router)

    return app


app = create_app()
