"""structlog configuration.

Everything is rendered to stderr: in MCP stdio mode stdout carries the
JSON-RPC stream and must stay clean.
"""

from __future__ import annotations

import logging
import sys

import structlog

from osquery_tools.config import Settings, settings


def setup_logging(cfg: Settings | None = None) -> None:
    """Configure structlog (and stdlib logging used by uvicorn / mcp)."""
    _cfg = cfg or settings
    level = getattr(logging, _cfg.log_level.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)

    renderer = (
        structlog.processors.JSONRenderer()
        if _cfg.log_json
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def get_logger(name: str | None = None) -> structlog.typing.FilteringBoundLogger:
    return structlog.get_logger(name)
