"""Tool listing and invocation endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from osquery_tools.models.outcome import ERROR_PREFIX
from osquery_tools.models.responses import (
    ErrorResponse,
    ToolCallRequest,
    ToolCallResponse,
    ToolInfo,
)
from osquery_tools.services.registry import (
    MissingArgumentError,
    ToolRegistry,
    UnknownToolError,
    get_registry,
)
from osquery_tools.utils.logging import get_logger

log = get_logger(__name__)

router = APIRouter(prefix="/tools", tags=["tools"])


@router.get("", response_model=list[ToolInfo])
async def list_tools(
    registry: ToolRegistry = Depends(get_registry),
) -> list[ToolInfo]:
    return [
        ToolInfo(name=t.name, description=t.description, parameter=t.parameter)
        for t in registry
    ]


@router.post(
    "/{name}",
    response_model=ToolCallResponse,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def call_tool(
    name: str,
    req: ToolCallRequest | None = None,
    registry: ToolRegistry = Depends(get_registry),
) -> ToolCallResponse:
    """Invoke a tool; query failures come back as ``Error: ...`` text.

    ``is_error`` is the single-query failure flag; see :class:`ToolCallResponse`.
    """
    argument = req.argument if req is not None else None
    try:
        result = await registry.invoke(name, argument)
    except UnknownToolError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except MissingArgumentError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    log.info("tools.called", tool=name, bytes=len(result))
    return ToolCallResponse(
        tool=name, result=result, is_error=result.startswith(ERROR_PREFIX),
    )
