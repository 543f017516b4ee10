from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from .error import ClientError, ServerError
import logging

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    if exc.base_error.reason:
        error_dict["reason"] = exc.base_error.reason
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


def build_lifespan(ApplicationConfig):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        sweeper = None
        if ApplicationConfig.SESSION_SWEEP_ENABLED:
            from src.adapter.services.session_sweeper import SessionSweeper
            from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
            from src.depends import AsyncSessionLocal, get_clock

            sweeper = SessionSweeper(
                uow_factory=lambda: SqlAlchemyUnitOfWork(AsyncSessionLocal()),
                clock=get_clock(),
                interval_seconds=ApplicationConfig.SESSION_SWEEP_INTERVAL_SECONDS,
                session_ttl=timedelta(seconds=ApplicationConfig.SESSION_TTL_SECONDS),
            )
            sweeper.start()
        try:
            yield
        finally:
            if sweeper is not None:
                await sweeper.stop()

    return lifespan


def create_app(ApplicationConfig) -> FastAPI:
    app = FastAPI(title="Auth API", version="0.1.0", lifespan=build_lifespan(ApplicationConfig))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import auth, health_check, sessions

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(sessions.router, tags=["Sessions"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
