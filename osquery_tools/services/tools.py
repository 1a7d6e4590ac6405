"""The osquery tool set exposed to agents.

Each public coroutine takes zero or one string argument and returns a string.
Their docstrings double as the tool descriptions shown to MCP clients.
"""

from __future__ import annotations

from typing import Optional

from osquery_tools.config import Settings, settings
from osquery_tools.services import query_catalog as catalog
from osquery_tools.services.process_runner import ProcessRunner
from osquery_tools.services.query_executor import QueryExecutor
from osquery_tools.services.reports import ReportAggregator
from osquery_tools.utils.logging import get_logger

log = get_logger(__name__)


class OsqueryTools:
    TOOL_NAMES = (
        "execute_osquery",
        "list_osquery_tables",
        "get_table_schema",
        "get_common_queries",
        "get_high_cpu_processes",
        "get_high_memory_processes",
        "get_network_connections",
        "get_temperature_info",
        "get_system_health_summary",
        "get_suspicious_processes",
        "get_high_disk_io_processes",
    )

    def __init__(
        self,
        executor: QueryExecutor,
        aggregator: ReportAggregator | None = None,
    ) -> None:
        self.executor = executor
        self.aggregator = aggregator or ReportAggregator(executor)

    async def _run(self, sql: str) -> str:
        return (await self.executor.execute(sql)).text

    async def execute_osquery(self, sql: str) -> str:
        """Execute osquery SQL queries to inspect system state.

        Query processes, users, network connections, and other OS data.
        Example: SELECT name, pid FROM processes
        """
        return await self._run(sql)

    async def list_osquery_tables(self) -> str:
        """List available osquery tables on this system."""
        return await self._run(catalog.LIST_TABLES)

    async def get_table_schema(self, table_name: str) -> str:
        """Get schema information for a specific osquery table.

        Shows column names and types to help construct queries.
        Example: get_table_schema("processes")
        """
        log.debug("tools.table_schema", table=table_name)
        return await self._run(catalog.table_schema(table_name))

    async def get_common_queries(self) -> str:
        """Get common queries for system diagnostics.

        Returns example queries for troubleshooting high CPU usage, memory
        consumption, network connections, recently modified files and user
        login history.
        """
        return catalog.COMMON_QUERIES

    async def get_high_cpu_processes(self) -> str:
        """Run a predefined query for high CPU usage processes.

        Returns the top 10 processes consuming the most CPU time.
        Useful for answering 'Why is my computer slow?' or 'What's using CPU?'
        """
        return await self._run(catalog.TOP_CPU_PROCESSES)

    async def get_high_memory_processes(self) -> str:
        """Run a predefined query for high memory usage processes.

        Returns the top 10 processes consuming the most memory.
        Useful for answering 'What's using all my RAM?' or 'Why is memory full?'
        """
        return await self._run(catalog.TOP_MEMORY_PROCESSES)

    async def get_network_connections(self) -> str:
        """Get current network connections.

        Shows established and listening sockets with process information.
        Useful for 'What's connected to the internet?' or 'What's using my network?'
        """
        return await self._run(catalog.NETWORK_CONNECTIONS)

    async def get_temperature_info(self) -> str:
        """Get system temperature and fan information (macOS only).

        Shows temperature sensors and fan speeds.
        Useful for 'Why is my fan running?' or 'Is my computer overheating?'
        """
        return await self.aggregator.temperature_info()

    async def get_system_health_summary(self) -> str:
        """Get an overall system health summary.

        Combines CPU, memory, disk, network and temperature information in
        one report. Useful for 'How is my system doing?'
        """
        return await self.aggregator.system_health_summary()

    async def get_suspicious_processes(self) -> str:
        """Find potentially suspicious processes.

        Flags processes without a parent process, running from a temporary
        directory, or whose name does not match their executable path.
        """
        return await self.aggregator.suspicious_processes()

    async def get_high_disk_io_processes(self) -> str:
        """Get the top 15 processes by disk I/O.

        Reports megabytes read, written and combined per process.
        Useful for 'What's thrashing my disk?'
        """
        return await self.aggregator.high_disk_io_processes()


def build_tools(
    cfg: Settings | None = None,
    *,
    runner: ProcessRunner | None = None,
    logger=None,
) -> OsqueryTools:
    """Wire runner → executor → aggregator → tool set."""
    executor = QueryExecutor(cfg, runner=runner, logger=logger)
    return OsqueryTools(executor, ReportAggregator(executor, logger=logger))


_tools: Optional[OsqueryTools] = None


def get_tools() -> OsqueryTools:
    """Process-wide tool set, created on first use (FastAPI dependency)."""
    global _tools
    if _tools is None:
        _tools = build_tools(settings)
    return _tools
