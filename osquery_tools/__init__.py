"""osquery diagnostic tools for AI agents (MCP) and HTTP clients."""

__version__ = "1.0.0"
