"""FastAPI application entry-point."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from osquery_tools import __version__
from osquery_tools.config import settings
from osquery_tools.routers import health, tools
from osquery_tools.services.tools import get_tools
from osquery_tools.utils.logging import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup hook: report whether osquery is installed (never fatal)."""
    setup_logging()
    await get_tools().executor.check_availability()
    yield


app = FastAPI(
    title="osquery Tools API",
    description="Predefined osquery diagnostics exposed as agent tools",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(tools.router)


def run() -> None:
    import uvicorn

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    run()
