"""osqueryi invocation.

Turns a SQL string into ``osqueryi --json "<sql>"``, runs it through the
:class:`ProcessRunner` and normalizes every way it can end into a
:class:`QueryOutcome`.  Nothing here raises on a failed query.
"""

from __future__ import annotations

import time

from osquery_tools.config import Settings, settings
from osquery_tools.models.execution import Command, Completed, TimedOut
from osquery_tools.models.outcome import QueryOutcome
from osquery_tools.services.process_runner import ProcessRunner
from osquery_tools.utils.logging import get_logger

log = get_logger(__name__)

INSTALL_URL = "https://osquery.io/downloads/"


class QueryExecutor:
    def __init__(
        self,
        cfg: Settings | None = None,
        *,
        runner: ProcessRunner | None = None,
        logger=None,
    ) -> None:
        self._cfg = cfg or settings
        self._log = logger or log
        self._runner = runner or ProcessRunner(logger=self._log)

    @property
    def binary(self) -> str:
        return self._cfg.osquery_binary

    async def execute(self, sql: str) -> QueryOutcome:
        """Run *sql* and return its JSON rows or an ``Error: ...`` outcome."""
        timeout = self._cfg.osquery_query_timeout_seconds
        self._log.debug("query.start", sql=sql)
        started = time.monotonic()

        result = await self._runner.run(
            Command.of(self.binary, "--json", sql), timeout,
        )
        elapsed = round(time.monotonic() - started, 3)

        if isinstance(result, Completed):
            if result.exit_code == 0:
                output = result.stdout.strip()
                self._log.debug("query.completed", bytes=len(output), elapsed=elapsed)
                return QueryOutcome.data(output)
            detail = result.stderr.strip() or (
                f"{self.binary} exited with code {result.exit_code}"
            )
            self._log.warning(
                "query.failed", sql=sql, rc=result.exit_code, error=detail,
            )
            return QueryOutcome.error(detail)

        if isinstance(result, TimedOut):
            self._log.warning("query.timeout", sql=sql, timeout=result.timeout)
            return QueryOutcome.error(
                f"Query execution timed out after {result.timeout:g} seconds"
            )

        self._log.error("query.spawn_failed", sql=sql, error=result.cause)
        return QueryOutcome.error(result.cause)

    async def check_availability(self) -> tuple[bool, str]:
        """Probe ``osqueryi --version``; logs the outcome and never raises."""
        result = await self._runner.run(
            Command.of(self.binary, "--version"),
            self._cfg.osquery_version_timeout_seconds,
        )

        if isinstance(result, Completed) and result.exit_code == 0:
            version = result.stdout.strip()
            self._log.info("osquery.available", version=version)
            return True, version

        if isinstance(result, Completed):
            detail = result.stderr.strip() or f"exit code {result.exit_code}"
            self._log.error(
                "osquery.check_failed", rc=result.exit_code, error=detail,
            )
        elif isinstance(result, TimedOut):
            detail = f"version check timed out after {result.timeout:g} seconds"
            self._log.error("osquery.check_timeout", timeout=result.timeout)
        else:
            detail = result.cause
            self._log.error(
                "osquery.unavailable",
                error=detail,
                hint=f"Please install osquery: {INSTALL_URL}",
            )
        return False, detail
