"""FastAPI application entrypoint. No business logic; only wiring, middleware and error translation."""

from dotenv import load_dotenv

load_dotenv()

import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from inkpost import __version__
from inkpost.api.v1 import router as v1_router
from inkpost.core.config import Settings, get_settings
from inkpost.core.errors import InkpostError, InternalFailureError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(settings: Settings) -> None:
    """Root logging at settings.LOG_LEVEL with UTC timestamps."""
    logging.Formatter.converter = time.gmtime
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )


async def inkpost_error_handler(request: Request, exc: InkpostError) -> JSONResponse:
    """Translate domain errors into their fixed status code and a {"msg": ...} body."""
    if isinstance(exc, InternalFailureError):
        logger.error(
            "Internal failure on %s %s: %s",
            request.method,
            request.url.path,
            exc.message,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"msg": InternalFailureError.default_message},
        )
    return JSONResponse(status_code=exc.status_code, content={"msg": exc.message})


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Unexpected store failure: log it, answer with a generic 500."""
    logger.error(
        "Database error on %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content={"msg": InternalFailureError.default_message},
    )


def create_app(
    settings: Settings | None = None,
    session_factory: sessionmaker[Session] | None = None,
) -> FastAPI:
    """
    Build the application.

    Passing settings installs them as the get_settings dependency for every
    route; passing session_factory replaces the engine built from DATABASE_URL.
    """
    explicit_settings = settings is not None
    settings = settings or get_settings()

    app = FastAPI(
        title="Inkpost API",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    if explicit_settings:
        app.dependency_overrides[get_settings] = lambda: settings
    if session_factory is not None:
        app.state.session_factory = session_factory

    origins = settings.CORS_ORIGINS or (["*"] if settings.APP_ENV == "dev" else [])
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(InkpostError, inkpost_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)

    app.include_router(v1_router, prefix=settings.API_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Inkpost API"}

    return app


configure_logging(get_settings())
app = create_app()
