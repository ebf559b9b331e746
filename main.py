import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from apis.base import api_router
from core.config import Settings, settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(app_settings: Settings = settings) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        port = getattr(app.state, "port", app_settings.PORT)
        logger.info(f"Server running at http://localhost:{port}")
        yield
        logger.info("Server shutting down")

    app = FastAPI(
        title=app_settings.PROJECT_NAME,
        version=app_settings.PROJECT_VERSION,
        lifespan=lifespan,
    )
    app.include_router(api_router)

    # mounted last so /run and /health win over files of the same name
    app.mount(
        "/",
        StaticFiles(directory=app_settings.STATIC_DIR, html=True),
        name="static",
    )
    return app


app = create_app()


def start_server(host: str | None = None, port: int | None = None):
    """
    Start the bridge and block until it is stopped.

    Args:
        host: Host to bind to, defaults to settings.HOST
        port: Port to listen on, defaults to settings.PORT
    """
    port = port or settings.PORT
    # the startup log reports this rather than settings.PORT
    app.state.port = port
    uvicorn.run(
        app,
        host=host or settings.HOST,
        port=port,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    start_server()
