"""
Departure Timetable Optimizer - Main Application Entry Point

This module initializes the FastAPI application with observability through
Logfire, sets up middleware, and mounts the schedule optimization API.
"""

import time
import traceback
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Dict, Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from dotenv import load_dotenv
import logfire

from src.core.config import settings
from src.api.v1 import schedule
from src.timetable.genome import DepartureSchedule
from src.timetable.arrivals import ArrivalModel

# Load environment variables
load_dotenv()

# Configure Logfire for observability
logfire.configure(**settings.get_logfire_settings())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle events.
    """
    logfire.info(
        "Application starting up",
        environment=settings.environment,
        version=settings.app_version,
        generations=settings.optimizer_generations,
        population_size=settings.optimizer_population_size
    )

    yield

    logfire.info("Application shutting down")


# Create FastAPI application instance
app = FastAPI(
    title=settings.app_name,
    description=(
        "Optimizes the departure timetable of a four-station rail line "
        "with a genetic algorithm, minimizing average passenger wait"
    ),
    version=settings.app_version,
    docs_url=settings.api_docs_url,
    redoc_url=settings.api_redoc_url,
    openapi_url=settings.api_openapi_url,
    lifespan=lifespan
)

# Enable Logfire instrumentation
logfire.instrument_fastapi(app, capture_headers=True)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Process-Time", "X-Request-ID"]
)


@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """
    Add processing time header and request tracking.
    """
    request_id = str(uuid.uuid4())
    start_time = time.time()

    with logfire.span(
        "HTTP Request",
        request_id=request_id,
        method=request.method,
        path=request.url.path,
        client_host=request.client.host if request.client else None
    ):
        response = await call_next(request)

        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)
        response.headers["X-Request-ID"] = request_id

        logfire.info(
            "Request completed",
            request_id=request_id,
            status_code=response.status_code,
            process_time=process_time
        )

        return response


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Handle HTTP exceptions with proper logging.
    """
    logfire.error(
        "HTTP Exception",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.detail,
            "status_code": exc.status_code,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """
    Handle unexpected exceptions with proper error logging.
    """
    logfire.error(
        "Unhandled Exception",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
        traceback=traceback.format_exc()
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "status_code": 500,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
    )


@app.get("/", tags=["Health"])
async def root() -> Dict[str, Any]:
    """
    Root endpoint providing basic API information.
    """
    return {
        "message": f"{settings.app_name} API",
        "status": "operational",
        "version": settings.app_version,
        "docs": settings.api_docs_url,
        "health": "/health",
        "schedule": f"{settings.api_v1_prefix}/schedule"
    }


def _check_optimizer() -> str:
    # Seed timetable on an empty day must be feasible and score zero
    genome = DepartureSchedule(ArrivalModel([]))
    return "operational" if genome.evaluate() == 0.0 else "degraded"


@app.get("/health", tags=["Health"])
async def health_check() -> Dict[str, Any]:
    """
    Health check endpoint.

    Returns service status and a self-check of the optimizer.
    """
    with logfire.span("Health check"):
        health_status = {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": settings.logfire_service_name,
            "environment": settings.environment,
            "version": settings.app_version,
            "checks": {
                "api": "operational",
                "optimizer": _check_optimizer()
            }
        }

        if any(status != "operational" for status in health_status["checks"].values()):
            health_status["status"] = "degraded"
            logfire.warning("Health check failed", checks=health_status["checks"])
        else:
            logfire.info("Health check passed")

        return health_status


app.include_router(schedule.router, prefix=f"{settings.api_v1_prefix}/schedule", tags=["Schedule"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="info"
    )
