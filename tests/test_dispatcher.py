"""Tests for the tool gateway (search_tools / execute_tool)."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, List, Mapping

from testrail_mcp import errors
from testrail_mcp.gateway.catalog import OperationCatalog, OperationDescriptor, SemanticType, param
from testrail_mcp.gateway.dispatcher import ToolGateway


class _Recorder:
    """Callable that records every invocation."""

    def __init__(self, result: Any = "ok") -> None:
        self.calls: List[Dict[str, Any]] = []
        self.result = result

    def __call__(self, args: Mapping[str, Any]) -> Any:
        self.calls.append(dict(args))
        return self.result


def _widget_gateway(invoke=None, **kwargs) -> ToolGateway:
    catalog = OperationCatalog()
    catalog.register(
        OperationDescriptor(
            name="get_widget",
            description="Fetch a widget by id",
            category="widgets",
            keywords=("widget", "fetch"),
            invoke=invoke or _Recorder(),
            parameters=(
                param("widgetId", "Widget id", SemanticType.INTEGER),
                param("verbose", "Verbose output", SemanticType.BOOLEAN, required=False, default="false"),
            ),
        )
    )
    catalog.register(
        OperationDescriptor(
            name="list_items",
            description="List all items",
            category="items",
            invoke=_Recorder([]),
        )
    )
    catalog.freeze()
    return ToolGateway(catalog, **kwargs)


def _many_gateway(count: int, **kwargs) -> ToolGateway:
    catalog = OperationCatalog()
    for i in range(count):
        catalog.register(
            OperationDescriptor(
                name=f"op_{i:02d}",
                description="generic operation",
                category="misc",
                invoke=_Recorder(),
            )
        )
    catalog.freeze()
    return ToolGateway(catalog, **kwargs)


class TestSearchTools:
    def test_widget_query_returns_only_widget(self) -> None:
        tools = _widget_gateway().search_tools("widget")
        assert [t["name"] for t in tools] == ["get_widget"]
        assert tools[0]["description"] == "Fetch a widget by id"
        assert tools[0]["category"] == "widgets"
        assert "examples" in tools[0]

    def test_blank_query_lists_catalog_in_registration_order(self) -> None:
        gw = _many_gateway(15)
        tools = gw.search_tools("", limit=12)
        assert [t["name"] for t in tools] == [f"op_{i:02d}" for i in range(12)]

    def test_blank_query_default_limit(self) -> None:
        tools = _many_gateway(15).search_tools("   ")
        assert len(tools) == 10

    def test_none_query_does_not_raise(self) -> None:
        assert len(_widget_gateway().search_tools(None)) == 2

    def test_limit_capped_at_max(self) -> None:
        gw = _many_gateway(30, max_limit=20)
        assert len(gw.search_tools("generic", limit=100)) == 20

    def test_bad_limits_fall_back_to_default(self) -> None:
        gw = _many_gateway(15, default_limit=5)
        for limit in (None, 0, -3, "abc", True, float("inf"), float("nan"), "1e999"):
            assert len(gw.search_tools("generic", limit=limit)) == 5

    def test_string_limit_parsed(self) -> None:
        assert len(_many_gateway(15).search_tools("generic", limit="3")) == 3

    def test_no_match_returns_empty(self) -> None:
        assert _widget_gateway().search_tools("kubernetes") == []

    def test_exact_name_first(self) -> None:
        assert _widget_gateway().search_tools("list_items")[0]["name"] == "list_items"


class TestExecuteTool:
    def test_widget_scenario_coerces_and_applies_default(self) -> None:
        recorder = _Recorder({"id": 42})
        gw = _widget_gateway(recorder)
        result = asyncio.run(gw.execute_tool("get_widget", {"widgetId": "42"}))
        assert result.ok
        assert result.value == {"id": 42}
        assert recorder.calls == [{"widgetId": 42, "verbose": False}]

    def test_success_value_passed_through_unchanged(self) -> None:
        payload = object()
        result = asyncio.run(_widget_gateway(_Recorder(payload)).execute_tool("get_widget", {"widgetId": 1}))
        assert result.value is payload

    def test_unknown_operation(self) -> None:
        recorder = _Recorder()
        gw = _widget_gateway(recorder)
        result = asyncio.run(gw.execute_tool("nope", {"widgetId": 1}))
        assert not result.ok
        assert result.kind == "UnknownOperationError"
        assert "search_tools" in result.failure.message
        assert recorder.calls == []

    def test_missing_required_not_invoked(self) -> None:
        recorder = _Recorder()
        result = asyncio.run(_widget_gateway(recorder).execute_tool("get_widget", {}))
        assert result.kind == "MissingRequiredArgumentError"
        assert result.failure.parameter == "widgetId"
        assert result.failure.operation_name == "get_widget"
        assert recorder.calls == []

    def test_invalid_argument_not_invoked(self) -> None:
        recorder = _Recorder()
        result = asyncio.run(_widget_gateway(recorder).execute_tool("get_widget", {"widgetId": "x"}))
        assert result.kind == "InvalidArgumentError"
        assert result.failure.details["expectedType"] == "integer"
        assert recorder.calls == []

    def test_json_string_arguments_accepted(self) -> None:
        recorder = _Recorder()
        result = asyncio.run(_widget_gateway(recorder).execute_tool("get_widget", '{"widgetId": 7}'))
        assert result.ok
        assert recorder.calls[0]["widgetId"] == 7

    def test_non_mapping_arguments_rejected(self) -> None:
        result = asyncio.run(_widget_gateway().execute_tool("get_widget", "[1, 2]"))
        assert result.kind == "InvalidArgumentError"
        assert result.failure.parameter == "arguments"

    def test_downstream_failure_wrapped_and_gateway_usable(self) -> None:
        calls = {"n": 0}

        def flaky(args):
            calls["n"] += 1
            if calls["n"] == 1:
                raise errors.TestrailApiError("TestRail API returned HTTP 400: bad", status_code=400)
            return "second"

        gw = _widget_gateway(flaky)
        first = asyncio.run(gw.execute_tool("get_widget", {"widgetId": 1}))
        assert first.kind == "DownstreamError"
        assert first.failure.details == {"cause": "TestrailApiError", "statusCode": 400}
        assert "bad" in first.failure.message

        second = asyncio.run(gw.execute_tool("get_widget", {"widgetId": 1}))
        assert second.ok
        assert second.value == "second"

    def test_async_callable_awaited(self) -> None:
        async def invoke(args):
            await asyncio.sleep(0)
            return args["widgetId"] * 2

        result = asyncio.run(_widget_gateway(invoke).execute_tool("get_widget", {"widgetId": 21}))
        assert result.value == 42

    def test_timeout(self) -> None:
        async def slow(args):
            await asyncio.sleep(5)

        result = asyncio.run(_widget_gateway(slow).execute_tool("get_widget", {"widgetId": 1}, timeout=0.01))
        assert result.kind == "TimeoutError"
        assert result.failure.details == {"timeoutSeconds": 0.01}

    def test_configured_timeout_used(self) -> None:
        async def slow(args):
            await asyncio.sleep(5)

        gw = _widget_gateway(slow, execute_timeout=0.01)
        assert asyncio.run(gw.execute_tool("get_widget", {"widgetId": 1})).kind == "TimeoutError"

    def test_concurrent_calls_not_serialized(self) -> None:
        started = []

        async def invoke(args):
            started.append(args["widgetId"])
            await asyncio.sleep(0.05)
            return args["widgetId"]

        gw = _widget_gateway(invoke)

        async def run_all():
            return await asyncio.gather(
                *(gw.execute_tool("get_widget", {"widgetId": i}) for i in range(5))
            )

        results = asyncio.run(asyncio.wait_for(run_all(), timeout=1.0))
        assert [r.value for r in results] == [0, 1, 2, 3, 4]


class TestResultShape:
    def test_success_dict(self) -> None:
        result = asyncio.run(_widget_gateway(_Recorder({"id": 1})).execute_tool("get_widget", {"widgetId": 1}))
        assert result.to_dict() == {"tool": "get_widget", "success": True, "result": {"id": 1}}

    def test_failure_dict_is_json_serialisable(self) -> None:
        result = asyncio.run(_widget_gateway().execute_tool("get_widget", {"widgetId": "x"}))
        data = result.to_dict()
        assert data["success"] is False
        assert data["error"]["kind"] == "InvalidArgumentError"
        assert data["error"]["parameter"] == "widgetId"
        json.dumps(data)
