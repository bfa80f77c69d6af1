"""
Account Service - user registration, login and profile over bearer tokens
"""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from typing import Optional
import logging

from .auth import PasswordHasher, TokenIssuer
from .config import Settings, get_settings
from .db import Database
from .errors import AccountError, ValidationFailure
from .routes import health, users

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AccountError)
    async def account_error_handler(_request: Request, exc: AccountError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(_request: Request, exc: RequestValidationError):
        error = ValidationFailure(detail=_format_validation_errors(exc))
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(_request: Request, exc: StarletteHTTPException):
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"message": "Route not found"})
        content = exc.detail if isinstance(exc.detail, dict) else {"message": str(exc.detail)}
        return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Something went wrong"},
        )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application around an explicit settings object.

    The database, password hasher and token issuer are constructed here and
    kept on ``app.state``; nothing is read from process-wide globals.
    """
    settings = settings or get_settings()
    settings.validate_runtime()
    configure_logging(settings)

    database = Database(settings)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        """Connect to the database before serving, close it after draining"""
        database.init_db()
        logger.info(f"Server running on port {settings.PORT} in {settings.APP_ENV} mode")
        yield
        database.close()

    app = FastAPI(
        title="Account Service",
        description="User registration, login and profile retrieval",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.database = database
    app.state.hasher = PasswordHasher(rounds=settings.PASSWORD_HASH_ROUNDS)
    app.state.tokens = TokenIssuer.from_settings(settings)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(users.router)
    app.include_router(health.router)

    return app
