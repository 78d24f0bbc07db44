"""
FastAPI Application Entry Point for the Teen Patti table.

This module creates and configures the FastAPI application with:
- HTTP routes for table management and actions
- WebSocket endpoint for real-time state pushes
- CORS middleware for the lobby front-end
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from teenpatti import __version__
from teenpatti.config import config
from teenpatti.server.routes import router
from teenpatti.server.websocket import session_manager, websocket_endpoint

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Teen Patti server starting (bots per table: {config.bot_count})")
    yield
    for session_id in list(session_manager.sessions):
        session_manager.remove(session_id)
    logger.info("Teen Patti server stopped")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Teen Patti",
        description="Three-card Teen Patti table engine with HTTP and WebSocket API",
        version=__version__,
        lifespan=lifespan,
    )

    # CORS middleware for development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)
    app.websocket("/ws")(websocket_endpoint)

    return app


# Create the application instance
app = create_app()


def main():
    """Run the server (for use as entry point)."""
    import uvicorn
    uvicorn.run(
        "teenpatti.server.app:app",
        host=config.host,
        port=config.port,
    )


if __name__ == "__main__":
    main()
