"""GoldSim — FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from goldsim import __version__
from goldsim.api import simulation
from goldsim.api.simulation import ErrorDetail
from goldsim.config import settings
from goldsim.database import engine
from goldsim.services.simulation import (
    DataIntegrityError,
    MissingQuoteError,
    NoDataError,
    ValidationError,
)

logger = logging.getLogger(__name__)

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: verify DB connection. Shutdown: dispose engine."""
    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Database connected successfully")
    except Exception as e:
        logger.error("Database connection failed: %s", e)
        raise
    yield
    await engine.dispose()
    logger.info("Database engine disposed")


app = FastAPI(
    title="GoldSim",
    description="What would a gold purchase on one day have been worth on another",
    version=__version__,
    lifespan=lifespan,
)

# CORS: restrict in production, allow localhost in development
_allowed_origins = (
    ["http://localhost:8000", "http://localhost:3000", "http://localhost:5173"]
    if settings.app_env == "development"
    else settings.allowed_hosts.split(",")
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type"],
)

app.include_router(simulation.router)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Inconsistent simulation request (422)."""
    logger.warning("Rejected simulation request: %s", exc)
    return JSONResponse(
        status_code=422,
        content=ErrorDetail(
            error="ValidationError",
            message=str(exc),
            details={"field": exc.field} if exc.field else None,
        ).model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed request body or query (422), same body as ValidationError."""
    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"][1:]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    first = errors[0] if errors else None
    logger.warning("Rejected request to %s: %s", request.url.path, errors)
    return JSONResponse(
        status_code=422,
        content=ErrorDetail(
            error="ValidationError",
            message=f"{first['field']}: {first['message']}" if first else "Request validation failed",
            details={"field": first["field"] if first else None, "errors": errors},
        ).model_dump(),
    )


@app.exception_handler(NoDataError)
async def no_data_handler(request: Request, exc: NoDataError) -> JSONResponse:
    """No quotes in the requested range (404)."""
    logger.warning("No quote data: %s", exc)
    return JSONResponse(
        status_code=404,
        content=ErrorDetail(
            error="NoDataError",
            message=str(exc),
            details={
                "start_date": exc.start_date.isoformat(),
                "end_date": exc.end_date.isoformat(),
            },
        ).model_dump(),
    )


@app.exception_handler(MissingQuoteError)
async def missing_quote_handler(request: Request, exc: MissingQuoteError) -> JSONResponse:
    """No quote on the exact buy or sell date (404)."""
    logger.warning("Missing boundary quote: %s", exc)
    return JSONResponse(
        status_code=404,
        content=ErrorDetail(
            error="MissingQuoteError",
            message=str(exc),
            details={
                "date": exc.missing_date.isoformat(),
                "boundary": exc.boundary,
            },
        ).model_dump(),
    )


@app.exception_handler(DataIntegrityError)
async def data_integrity_handler(request: Request, exc: DataIntegrityError) -> JSONResponse:
    """Stored price is unusable, upstream data fault (502)."""
    logger.error("Quote data integrity fault: %s", exc)
    return JSONResponse(
        status_code=502,
        content=ErrorDetail(
            error="DataIntegrityError",
            message=str(exc),
            details={"date": exc.quote_date.isoformat()},
        ).model_dump(),
    )


@app.get("/api")
async def api_root():
    return {
        "name": "GoldSim",
        "version": __version__,
        "status": "running",
        "app_env": settings.app_env,
        "data_min_date": settings.data_min_date.isoformat(),
        "data_max_date": settings.data_max_date.isoformat(),
    }
