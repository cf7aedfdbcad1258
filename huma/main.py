from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import ProgrammingError, OperationalError
from huma.core.config import settings
from huma.core.errors import AppError
from huma.core.logging import configure_logging
from huma.api.routes import health, checkins, team
from huma.schemas.common import ErrorResponse
import logging

def _error(status_code: int, error: str, detail: str | None, error_code: str) -> JSONResponse:
    body = ErrorResponse(error=error, detail=detail, error_code=error_code)
    return JSONResponse(status_code=status_code, content=body.model_dump())

def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title=settings.APP_NAME)
    logger = logging.getLogger(__name__)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"], allow_credentials=True,
        allow_methods=["*"], allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("Unhandled application error on %s: %s", request.url.path, exc.message)
        else:
            logger.warning("%s on %s: %s", exc.error_code, request.url.path, exc.message)
        return _error(exc.status_code, exc.message, None, exc.error_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        details = "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()
        )
        logger.warning("Invalid request on %s: %s", request.url.path, details)
        return _error(400, "Invalid request parameters", details, "VALIDATION_ERROR")

    @app.exception_handler(ProgrammingError)
    async def programming_error_handler(request: Request, exc: ProgrammingError):
        logger.error(f"Database programming error: {exc}")
        # Check if it's a column not found error
        if "does not exist" in str(exc):
            return _error(
                503,
                "Database schema mismatch detected",
                "The application schema is out of sync with the database. Please contact support.",
                "SCHEMA_MISMATCH",
            )
        return _error(500, "Database query error", "There was an error executing the database query", "DATABASE_ERROR")

    @app.exception_handler(OperationalError)
    async def operational_error_handler(request: Request, exc: OperationalError):
        logger.error(f"Database operational error: {exc}")
        return _error(
            503,
            "Database connection error",
            "Unable to connect to the database. Please try again later.",
            "DATABASE_CONNECTION_ERROR",
        )

    # routes
    app.include_router(health.router)
    app.include_router(checkins.router)
    app.include_router(team.router)
    return app

app = create_app()
