"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.config import settings
from app.database import Database
from app.errors import ConstraintViolationError, NotFoundError, StorageError, StoreUnavailableError
from app.logging_config import setup_logging
from app.routes import boxes, goods
from app.services.persistence import PersistenceGateway
from app.services.storage_manager import StorageManager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)
    database = Database(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
    await database.create_all()
    app.state.database = database
    app.state.storage = StorageManager(PersistenceGateway(database))
    logger.info("%s %s started", settings.APP_NAME, settings.APP_VERSION)
    yield
    await database.dispose()


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    description="Persistent storage for boxes and the goods inside them",
    lifespan=lifespan,
)

# Include routers
app.include_router(boxes.router, prefix="/api")
app.include_router(goods.router, prefix="/api")

_ERROR_STATUS = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConstraintViolationError: status.HTTP_409_CONFLICT,
    StoreUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    """Map storage failures to HTTP responses."""
    status_code = _ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


@app.get("/health")
async def health_check(request: Request):
    """Health check endpoint."""
    healthy = await request.app.state.database.health_check()
    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "healthy" if healthy else "unavailable"},
    )


def run():
    """Serve the API with uvicorn; DEBUG turns on auto-reload."""
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
