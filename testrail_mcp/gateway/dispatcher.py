"""The tool gateway: ``search_tools`` and ``execute_tool``.

These two operations are the only way to reach the internal operations.
``execute_tool`` runs LOOKUP -> VALIDATE -> INVOKE and always returns an
:class:`InvocationResult`; no failure of an underlying operation escapes.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from testrail_mcp.constants import DEFAULT_SEARCH_LIMIT, MAX_SEARCH_LIMIT
from testrail_mcp.errors import (
    DownstreamError,
    GatewayError,
    InvalidArgumentError,
    InvocationTimeoutError,
    UnknownOperationError,
)
from testrail_mcp.gateway.catalog import Invoker, OperationCatalog, OperationDescriptor
from testrail_mcp.gateway.coercion import validate_arguments
from testrail_mcp.gateway.results import InvocationRequest, InvocationResult
from testrail_mcp.gateway.search import ToolIndex

logger = logging.getLogger(__name__)

RawArguments = Union[Mapping[str, Any], str, None]


def _is_async_callable(fn: Invoker) -> bool:
    while isinstance(fn, functools.partial):
        fn = fn.func
    return inspect.iscoroutinefunction(fn) or inspect.iscoroutinefunction(
        getattr(fn, "__call__", None)
    )


def _decode_arguments(arguments: RawArguments) -> Mapping[str, Any]:
    """Accept a mapping, a JSON object string, or nothing."""
    if arguments is None:
        return {}
    if isinstance(arguments, str):
        if not arguments.strip():
            return {}
        try:
            arguments = json.loads(arguments)
        except ValueError:
            raise InvalidArgumentError(
                "arguments", "object", arguments, reason="malformed JSON"
            ) from None
    if not isinstance(arguments, Mapping):
        raise InvalidArgumentError("arguments", "object", arguments)
    return arguments


class ToolGateway:
    """Search and dispatch over a frozen :class:`OperationCatalog`.

    Parameters
    ----------
    catalog:
        The registered operations.
    index:
        Prebuilt search index; built from *catalog* when omitted.
    default_limit / max_limit:
        ``search_tools`` result count when unspecified, and its upper bound.
    execute_timeout:
        Seconds before ``execute_tool`` gives up on an operation.  ``None``
        disables the timeout.
    """

    def __init__(
        self,
        catalog: OperationCatalog,
        index: Optional[ToolIndex] = None,
        *,
        default_limit: int = DEFAULT_SEARCH_LIMIT,
        max_limit: int = MAX_SEARCH_LIMIT,
        execute_timeout: Optional[float] = None,
    ) -> None:
        self._catalog = catalog
        self._index = index if index is not None else ToolIndex(catalog)
        self._default_limit = default_limit
        self._max_limit = max(max_limit, 1)
        self._execute_timeout = execute_timeout

    @property
    def catalog(self) -> OperationCatalog:
        return self._catalog

    @property
    def index(self) -> ToolIndex:
        return self._index

    # ── search_tools ─────────────────────────────────────────────────

    def _resolve_limit(self, limit: Any) -> int:
        if limit is None or isinstance(limit, bool):
            return self._default_limit
        try:
            value = int(limit)
        except (TypeError, ValueError, OverflowError):
            return self._default_limit
        if value < 1:
            return self._default_limit
        return min(value, self._max_limit)

    def search_tools(self, query: Optional[str], limit: Any = None) -> List[Dict[str, Any]]:
        """Return ranked tool details for *query*.

        A blank query lists the catalog in registration order.  Never raises.
        """
        n = self._resolve_limit(limit)
        text = query if isinstance(query, str) else ""
        logger.info("search_tools called with query='%s', limit=%d", text, n)

        if not text.strip():
            return [
                {**d.to_full_details(), "score": 0.0} for d in self._catalog.all()[:n]
            ]
        hits = self._index.search(text, limit=n)
        logger.debug("search_tools '%s' matched %d tools", text, len(hits))
        return [hit.to_dict() for hit in hits]

    # ── execute_tool ─────────────────────────────────────────────────

    async def execute_tool(
        self,
        name: str,
        arguments: RawArguments = None,
        *,
        timeout: Optional[float] = None,
    ) -> InvocationResult:
        """Validate *arguments* and run the operation called *name*."""
        logger.info("execute_tool called with toolName='%s'", name)
        limit = timeout if timeout is not None else self._execute_timeout
        try:
            request = InvocationRequest(operation_name=name, raw_arguments=_decode_arguments(arguments))
            descriptor = self._lookup(request.operation_name)
            coerced = validate_arguments(descriptor, request.raw_arguments)
            if limit is None:
                value = await self._invoke(descriptor, coerced)
            else:
                try:
                    value = await asyncio.wait_for(self._invoke(descriptor, coerced), timeout=limit)
                except asyncio.TimeoutError:
                    raise InvocationTimeoutError(name, limit) from None
        except DownstreamError as exc:
            logger.error(
                "Tool '%s' execution failed: %s", name, exc.cause, exc_info=exc.cause
            )
            return InvocationResult.from_error(name, exc)
        except GatewayError as exc:
            logger.warning("execute_tool '%s' rejected: %s", name, exc.message)
            return InvocationResult.from_error(name, exc)

        return InvocationResult.success(name, value)

    def _lookup(self, name: str) -> OperationDescriptor:
        descriptor = self._catalog.get(name) if isinstance(name, str) else None
        if descriptor is None:
            raise UnknownOperationError(str(name))
        return descriptor

    async def _invoke(self, descriptor: OperationDescriptor, arguments: Mapping[str, Any]) -> Any:
        """Call the operation; any exception becomes :class:`DownstreamError`."""
        try:
            if _is_async_callable(descriptor.invoke):
                return await descriptor.invoke(arguments)
            result = await asyncio.to_thread(descriptor.invoke, arguments)
            if inspect.isawaitable(result):
                result = await result
            return result
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            raise DownstreamError(descriptor.name, exc) from exc
