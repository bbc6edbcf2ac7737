"""Entry point for the User Directory API.

Starts the FastAPI application with Uvicorn.  Host, port and the rest
of the configuration come from environment variables (see
``user_directory_api.app.core.config``).

Usage:
    python run.py
"""
import asyncio

from uvicorn import Config, Server

from user_directory_api.app.core.config import Settings
from user_directory_api.app.main import create_app


async def main() -> None:
    """Build the application and serve it until interrupted."""
    settings = Settings.from_env()
    app = create_app(settings)
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
