from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from chatrelay.api import health, messages, participants, status
from chatrelay.core import config
from chatrelay.core.db import build_engine, build_session_factory, create_all
from chatrelay.middleware.request_logger import RequestLoggerMiddleware
from chatrelay.services.errors import ChatRelayError

# ---- Logging config ---------------------------------------------------------
logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s:%(lineno)d - %(message)s",
)
logger = logging.getLogger("chatrelay.main")


def create_app(database_url: Optional[str] = None) -> FastAPI:
    """
    Build the relay application.

    The engine and session factory are owned by the returned app
    (`app.state`); tables are created on startup and the engine is disposed
    on shutdown.
    """
    url = database_url or config.DATABASE_URL
    engine = build_engine(url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Auto-create tables (safe to run repeatedly)
        create_all(engine)
        logger.info("Startup completed. database=%s", engine.url.render_as_string(hide_password=True))
        yield
        engine.dispose()
        logger.info("Shutdown completed.")

    # ---- FastAPI app --------------------------------------------------------
    app = FastAPI(title="Chat Relay", lifespan=lifespan)
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.add_middleware(RequestLoggerMiddleware)

    # ---- CORS ---------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials="*" not in config.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---- Errors -------------------------------------------------------------
    @app.exception_handler(ChatRelayError)
    async def _chatrelay_error(request: Request, exc: ChatRelayError):
        if exc.status_code >= 500:
            logger.error("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.detail)
        else:
            logger.warning("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    # ---- Routers ------------------------------------------------------------
    app.include_router(participants.router, prefix="/participants", tags=["Participants"])
    app.include_router(messages.router,     prefix="/messages",     tags=["Messages"])
    app.include_router(status.router,       prefix="/status",       tags=["Status"])
    # Health + introspection
    app.include_router(health.router,       prefix="/health",       tags=["Health"])

    logger.info("Routers registered.")
    return app

