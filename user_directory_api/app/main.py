"""
Main entrypoint for the User Directory API.

This module assembles the FastAPI application, sets up logging, creates
the user service and includes versioned routers.  ``create_app`` builds
and configures the app, which is then instantiated at module import
time as ``app``, so it can be served with::

    uvicorn user_directory_api.app.main:app --reload
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from .core.config import Settings, settings as default_settings
from .core.logging_config import setup_logging
from .api.v1.router import router as v1_router
from .services.user_service import UserService

logger = logging.getLogger(__name__)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Render ``HTTPException`` using the ``{"error": ...}`` envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render faults that escaped an endpoint's own handling as a 500.

    Starlette's ``ServerErrorMiddleware`` sends this response and then
    re‑raises the exception, so the traceback is logged by the server
    (uvicorn) rather than here.
    """
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def create_app(
    settings: Optional[Settings] = None,
    service: Optional[UserService] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use; the module level ``settings`` by default.
    service : Optional[UserService]
        User store to serve.  When omitted a fresh one is built and,
        if ``settings.seed_sample_users`` is set, filled with the
        sample users.  Tests pass their own instance to stay isolated.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings

    # Logging first so that everything below can log.
    setup_logging(settings.log_level, settings.log_file or None)

    if service is None:
        service = UserService()
        if settings.seed_sample_users:
            service.seed_sample_users()

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.user_service = service

    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(v1_router, prefix=settings.api_prefix)

    logger.info("%s %s ready with %d users", settings.project_name, settings.api_version, len(service))
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
