"""
Main Application Entry Point for memprobe (FastAPI)

This module builds the FastAPI server that allocates in-memory records on
request and logs process memory statistics, setting up:
- The allocation reporter, held on `app.state` and shared by requests.
- tracemalloc tracing for the lifetime of the application.
- Mounted route handlers for allocation and health checks.

Environment Variables:
- `HOST`, `PORT`: Listen address (default `0.0.0.0:8000`)
- `LOG_LEVEL`: Root log level (default `INFO`)
- `FORCE_GC`: Force collection passes around each allocation (default `true`)
- `STRICT_COUNT`: Reject zero/unparseable counts with 400 (default `false`)
- `TRACEMALLOC_FRAMES`: Frames stored per traced allocation (default `1`)

Routers:
- `/entity/{count}`: Allocates records and reports their size
- `/health`: Health check for deployment monitoring
"""

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

from .allocation.config import Settings, get_settings, logger
from .allocation.reporter import AllocationReporter
from .allocation.stats import start_tracing, stop_tracing
from .routers.entity import router as entity_router
from .routers.health import router as health_router


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create the FastAPI application with its reporter and routers"""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        started = start_tracing(settings.tracemalloc_frames)
        try:
            yield
        finally:
            if started:
                stop_tracing()

    app = FastAPI(title="memprobe", lifespan=lifespan)
    app.state.settings = settings
    app.state.reporter = AllocationReporter(force_gc=settings.force_gc)

    app.include_router(entity_router, tags=["entity"])
    app.include_router(health_router, tags=["health"])
    return app


app = create_app()


def main():
    """Run the API server"""
    settings = app.state.settings
    logger.info(f"Starting memprobe on {settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
