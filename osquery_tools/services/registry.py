"""Explicit tool registry.

Maps a tool name to its coroutine.  Built once at startup and handed to the
transports (FastMCP, FastAPI); neither needs to know about ``OsqueryTools``.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterator, Optional

from osquery_tools.services.tools import OsqueryTools, get_tools


class ToolError(Exception):
    """Structured failure at the tool-call boundary."""


class UnknownToolError(ToolError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class MissingArgumentError(ToolError):
    def __init__(self, tool: str, parameter: str) -> None:
        super().__init__(f"Tool '{tool}' requires argument '{parameter}'")
        self.tool = tool
        self.parameter = parameter


@dataclass(frozen=True)
class Tool:
    name: str
    description: str
    handler: Callable[..., Awaitable[str]]
    parameter: Optional[str] = None

    @classmethod
    def from_function(cls, fn: Callable[..., Awaitable[str]]) -> Tool:
        params = list(inspect.signature(fn).parameters)
        if len(params) > 1:
            raise ValueError(f"{fn.__name__} takes more than one argument")
        return cls(
            name=fn.__name__,
            description=inspect.getdoc(fn) or "",
            handler=fn,
            parameter=params[0] if params else None,
        )

    async def call(self, argument: str | None = None) -> str:
        if self.parameter is None:
            return await self.handler()
        if argument is None:
            raise MissingArgumentError(self.name, self.parameter)
        return await self.handler(argument)


class ToolRegistry:
    def __init__(self) -> None:
        self._tools: dict[str, Tool] = {}

    def register(self, fn: Callable[..., Awaitable[str]]) -> Tool:
        tool = Tool.from_function(fn)
        if tool.name in self._tools:
            raise ValueError(f"Tool already registered: {tool.name}")
        self._tools[tool.name] = tool
        return tool

    def get(self, name: str) -> Tool:
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownToolError(name) from None

    async def invoke(self, name: str, argument: str | None = None) -> str:
        return await self.get(name).call(argument)

    def __iter__(self) -> Iterator[Tool]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    @classmethod
    def from_toolset(cls, tools: OsqueryTools) -> ToolRegistry:
        registry = cls()
        for name in tools.TOOL_NAMES:
            registry.register(getattr(tools, name))
        return registry


_registry: Optional[ToolRegistry] = None


def get_registry() -> ToolRegistry:
    """Registry over :func:`get_tools` (FastAPI dependency)."""
    global _registry
    if _registry is None:
        _registry = ToolRegistry.from_toolset(get_tools())
    return _registry
