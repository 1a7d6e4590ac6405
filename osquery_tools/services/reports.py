"""Composite reports built from several concurrent osquery calls.

Sub-queries are independent, so they are launched together and joined with
``asyncio.gather``: a report takes about as long as its slowest query.
``gather`` returns results in argument order, which fixes section order no
matter which query finishes first.  A failing section is rendered inline and
never aborts the report.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable

from osquery_tools.models.outcome import CompositeReport, QueryOutcome
from osquery_tools.services import query_catalog as catalog
from osquery_tools.services.query_executor import QueryExecutor
from osquery_tools.utils.logging import get_logger

log = get_logger(__name__)

HEALTH_SUMMARY_TITLE = "System Health Summary:"
TEMPERATURE_UNAVAILABLE = (
    "Temperature and fan information is not available on this system."
)


class ReportAggregator:
    def __init__(self, executor: QueryExecutor, *, logger=None) -> None:
        self._executor = executor
        self._log = logger or log

    # ── composite reports ─────────────────────────────────────────────

    async def system_health_summary(self) -> str:
        """CPU, memory, disk, network and temperature in one report."""
        sections: list[tuple[str, Awaitable[QueryOutcome]]] = [
            ("CPU Usage", self._executor.execute(catalog.TOP_CPU_PROCESSES)),
            ("Memory Usage", self._executor.execute(catalog.TOP_MEMORY_PROCESSES)),
            ("Disk Usage", self._executor.execute(catalog.DISK_MOUNTS)),
            ("Network Connections", self._executor.execute(catalog.NETWORK_CONNECTIONS)),
            ("Temperature and Fans", self._temperature_section()),
        ]
        report = await self._gather(sections, title=HEALTH_SUMMARY_TITLE)
        self._log.info(
            "report.health_summary", failed_sections=report.failed_sections,
        )
        return report.render()

    async def temperature_info(self) -> str:
        """Temperature sensors and fan speeds (macOS only)."""
        report = await self._gather([
            ("Temperature sensors", self._executor.execute(catalog.TEMPERATURE_SENSORS)),
            ("Fan speeds", self._executor.execute(catalog.FAN_SENSORS)),
        ])
        if len(report.failed_sections) == len(report.sections):
            return TEMPERATURE_UNAVAILABLE
        return report.render(mask_errors=True)

    # ── single-query reports ──────────────────────────────────────────

    async def suspicious_processes(self) -> str:
        outcome = await self._executor.execute(catalog.SUSPICIOUS_PROCESSES)
        return outcome.text

    async def high_disk_io_processes(self) -> str:
        outcome = await self._executor.execute(catalog.TOP_DISK_IO_PROCESSES)
        return outcome.text

    # ── helpers ───────────────────────────────────────────────────────

    async def _temperature_section(self) -> QueryOutcome:
        return QueryOutcome.data(await self.temperature_info())

    async def _gather(
        self,
        sections: list[tuple[str, Awaitable[QueryOutcome]]],
        *,
        title: str | None = None,
    ) -> CompositeReport:
        results = await asyncio.gather(
            *(call for _, call in sections), return_exceptions=True,
        )
        report = CompositeReport(title=title)
        for (label, _), result in zip(sections, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                self._log.error("report.section_failed", section=label, error=str(result))
                result = QueryOutcome.error(str(result) or type(result).__name__)
            report.add(label, result)
        return report
