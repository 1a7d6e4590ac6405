"""Shared pytest fixtures."""

from __future__ import annotations

import os

# Force settings to use test-safe defaults before any import
os.environ.setdefault("OSQUERY_BINARY", "osqueryi")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

import pytest
from httpx import ASGITransport, AsyncClient

from osquery_tools.config import Settings
from osquery_tools.models.execution import Completed
from tests.mock_osquery import CPU_ROWS, VERSION, FakeRunner


@pytest.fixture
def cfg():
    return Settings(osquery_binary="osqueryi")


@pytest.fixture
def fake_runner():
    """Runner answering every command with canned CPU rows."""
    return FakeRunner(Completed(exit_code=0, stdout=CPU_ROWS + "\n"))


@pytest.fixture
async def client(cfg, fake_runner):
    """Async test client with the fake runner wired into the tool set."""
    from osquery_tools.main import app as fastapi_app
    from osquery_tools.services.registry import ToolRegistry, get_registry
    from osquery_tools.services.tools import build_tools, get_tools

    tools = build_tools(cfg, runner=fake_runner)
    registry = ToolRegistry.from_toolset(tools)

    fastapi_app.dependency_overrides[get_tools] = lambda: tools
    fastapi_app.dependency_overrides[get_registry] = lambda: registry

    transport = ASGITransport(app=fastapi_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def version_runner():
    return FakeRunner(Completed(exit_code=0, stdout=VERSION + "\n"))
