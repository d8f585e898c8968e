import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ledgerly.config import get_settings
from ledgerly.database import get_engine, init_db
from ledgerly.exceptions import InvalidStateError, NotFoundError, ValidationError
from ledgerly.logging_config import configure_logging
from ledgerly.routers import items, summary

# Configure logging at startup
configure_logging(get_settings().log_level)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    init_db(get_engine())
    logger.info("Database ready")
    yield


app = FastAPI(title="Ledgerly", lifespan=lifespan)

# Routers
app.include_router(items.router, prefix="/api/items", tags=["items"])
app.include_router(summary.router, prefix="/api/summary", tags=["summary"])


@app.exception_handler(NotFoundError)
def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Unknown ids map to 404."""
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(ValidationError)
def validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Rejected input maps to 400 and names the offending field."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc), "field": exc.field},
    )


@app.exception_handler(InvalidStateError)
def invalid_state_handler(request: Request, exc: InvalidStateError) -> JSONResponse:
    """Transitions not allowed from the current status map to 409."""
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": str(exc), "status": exc.status},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    return {"status": "ok"}
