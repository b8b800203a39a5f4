"""FastAPI application entry point with APScheduler."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from motivatr.config import get_settings
from motivatr.errors import NotFoundError, ValidationError
from motivatr.services.scheduler_service import scheduler, setup_scheduler

logger = logging.getLogger(__name__)
settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.APP_DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)-8s %(name)s  %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting Motivatr...")
    setup_scheduler()
    scheduler.start()
    logger.info("APScheduler started with %d jobs", len(scheduler.get_jobs()))

    yield

    # Shutdown
    scheduler.shutdown(wait=False)
    logger.info("APScheduler stopped")


app = FastAPI(
    title="Motivatr",
    description="Personal task board with daily streaks and reminders",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse({"detail": str(exc)}, status_code=422)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse({"detail": str(exc)}, status_code=404)


# REST API router
from motivatr.api.v1.router import router as api_router  # noqa: E402
from motivatr.api.v1.auth import router as auth_router  # noqa: E402

app.include_router(api_router, prefix="/api")
app.include_router(auth_router)


@app.get("/health")
async def health():
    """Basic liveness probe."""
    return {"status": "ok", "service": "motivatr"}


@app.get("/health/ready")
async def health_ready():
    """Readiness probe with database check."""
    from motivatr.database import engine
    from sqlalchemy import text

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return {"status": "ready", "database": "ok"}
    except Exception as e:
        logger.error("Health ready check failed: %s", e)
        return JSONResponse(
            {"status": "not_ready", "database": "error"},
            status_code=503
        )


def run():
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "motivatr.main:app",
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        log_level="debug" if settings.APP_DEBUG else "info",
    )
