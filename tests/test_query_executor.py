"""Tests for osqueryi invocation and outcome normalization."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from osquery_tools.config import Settings
from osquery_tools.models.execution import Completed, SpawnFailed, TimedOut
from osquery_tools.services.query_executor import QueryExecutor
from tests.mock_osquery import CPU_ROWS, VERSION, FakeRunner


def _executor(cfg, result):
    runner = FakeRunner(result)
    return QueryExecutor(cfg, runner=runner), runner


class TestExecute:
    @pytest.mark.asyncio
    async def test_builds_json_command_with_query_timeout(self, cfg):
        executor, runner = _executor(cfg, Completed(exit_code=0, stdout="[]"))
        await executor.execute("SELECT name FROM processes")

        command, timeout = runner.calls[0]
        assert command.argv == ("osqueryi", "--json", "SELECT name FROM processes")
        assert timeout == 30

    @pytest.mark.asyncio
    async def test_binary_comes_from_settings(self):
        cfg = Settings(osquery_binary="/opt/osquery/bin/osqueryi")
        executor, runner = _executor(cfg, Completed(exit_code=0, stdout="[]"))
        await executor.execute("SELECT 1")
        assert runner.calls[0][0].executable == "/opt/osquery/bin/osqueryi"

    @pytest.mark.asyncio
    async def test_success_returns_data(self, cfg):
        executor, _ = _executor(cfg, Completed(exit_code=0, stdout=CPU_ROWS + "\n"))
        outcome = await executor.execute("SELECT 1")
        assert not outcome.is_error
        assert outcome.text == CPU_ROWS

    @pytest.mark.asyncio
    async def test_nonzero_exit_returns_stderr(self, cfg):
        executor, _ = _executor(
            cfg,
            Completed(
                exit_code=1,
                stderr='Error: near "INVALID": syntax error\n',
            ),
        )
        outcome = await executor.execute("INVALID SQL QUERY")
        assert outcome.is_error
        assert outcome.text.startswith("Error: ")
        assert "syntax error" in outcome.text

    @pytest.mark.asyncio
    async def test_nonzero_exit_without_stderr_names_exit_code(self, cfg):
        executor, _ = _executor(cfg, Completed(exit_code=2))
        outcome = await executor.execute("SELECT 1")
        assert outcome.text == "Error: osqueryi exited with code 2"

    @pytest.mark.asyncio
    async def test_timeout_message(self, cfg):
        executor, _ = _executor(cfg, TimedOut(timeout=30))
        outcome = await executor.execute("SELECT 1")
        assert outcome.text == "Error: Query execution timed out after 30 seconds"

    @pytest.mark.asyncio
    async def test_spawn_failure_message(self, cfg):
        cause = "[Errno 2] No such file or directory: 'osqueryi'"
        executor, _ = _executor(cfg, SpawnFailed(cause=cause))
        outcome = await executor.execute("SELECT 1")
        assert outcome.is_error
        assert outcome.text == f"Error: {cause}"


class TestCheckAvailability:
    @pytest.mark.asyncio
    async def test_available(self, cfg, version_runner):
        executor = QueryExecutor(cfg, runner=version_runner)
        with capture_logs() as logs:
            available, version = await executor.check_availability()

        assert available is True
        assert version == VERSION
        command, timeout = version_runner.calls[0]
        assert command.argv == ("osqueryi", "--version")
        assert timeout == 5
        assert any(e["event"] == "osquery.available" for e in logs)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "result,event",
        [
            (SpawnFailed(cause="No such file or directory"), "osquery.unavailable"),
            (TimedOut(timeout=5), "osquery.check_timeout"),
            (Completed(exit_code=1, stderr="boom"), "osquery.check_failed"),
        ],
    )
    async def test_failures_are_logged_not_raised(self, cfg, result, event):
        executor, _ = _executor(cfg, result)
        with capture_logs() as logs:
            available, detail = await executor.check_availability()

        assert available is False
        assert detail
        assert [e for e in logs if e["event"] == event][0]["log_level"] == "error"
