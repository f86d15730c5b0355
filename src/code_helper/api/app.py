from __future__ import annotations

from fastapi import FastAPI

from code_helper.api.dependencies import configure
from code_helper.api.errors import install_exception_handlers
from code_helper.api.lifespan import lifespan
from code_helper.api.middleware import RequestLoggingMiddleware
from code_helper.api.routes.auth import router as auth_router
from code_helper.api.routes.code_helper import router as code_helper_router
from code_helper.api.routes.health import router as health_router
from code_helper.api.routes.root import router as root_router
from code_helper.config import Settings


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API application.

    Without explicit *settings* the environment is read immediately, so a
    missing provider key raises ``ConfigError`` before the server starts.
    """
    configure(settings)

    app = FastAPI(
        title="AI Code Helper API",
        description="Explain, fix, convert and document code with a hosted LLM.",
        version="0.1.0",
        lifespan=lifespan,
    )
    install_exception_handlers(app)
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(root_router, include_in_schema=False)
    app.include_router(health_router, include_in_schema=False)
    app.include_router(code_helper_router)
    app.include_router(auth_router)

    return app
