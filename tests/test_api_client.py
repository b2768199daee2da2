"""Tests for the TestRail HTTP client (httpx.MockTransport)."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, List

import httpx
import pytest

from testrail_mcp import errors
from testrail_mcp.client import TestrailClient, compact
from testrail_mcp.config.schema import TestrailSettings


def _settings(**overrides: Any) -> TestrailSettings:
    data: Dict[str, Any] = {
        "base_url": "https://example.testrail.io",
        "username": "qa@example.com",
        "api_key": "secret-key",
    }
    data.update(overrides)
    return TestrailSettings(**data)


def _client(handler, seen: List[httpx.Request]) -> TestrailClient:
    def _record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    return TestrailClient(_settings(), transport=httpx.MockTransport(_record))


def _run(coro_fn):
    """Run ``coro_fn(client)`` and close the client afterwards."""

    async def _main(client):
        try:
            return await coro_fn(client)
        finally:
            await client.close()

    return _main


class TestBuildUrl:
    def test_api_path_appended(self) -> None:
        client = TestrailClient(_settings())
        assert client.build_url("get_case/1") == "https://example.testrail.io/index.php?/api/v2/get_case/1"
        asyncio.run(client.close())

    def test_trailing_slash_base(self) -> None:
        client = TestrailClient(_settings(base_url="https://example.testrail.io/"))
        assert client.build_url("get_projects").endswith("/index.php?/api/v2/get_projects")
        asyncio.run(client.close())

    def test_query_encoding(self) -> None:
        client = TestrailClient(_settings())
        url = client.build_url(
            "get_runs/1",
            {"is_completed": False, "suite_id": [1, 2], "limit": 250, "offset": None},
        )
        assert url.endswith("get_runs/1&is_completed=0&suite_id=1,2&limit=250")
        asyncio.run(client.close())


class TestRequests:
    def test_get_sends_basic_auth_and_parses_json(self) -> None:
        seen: List[httpx.Request] = []
        client = _client(lambda r: httpx.Response(200, json={"id": 1, "title": "Login"}), seen)

        result = asyncio.run(_run(lambda c: c.get("get_case/1"))(client))

        assert result == {"id": 1, "title": "Login"}
        request = seen[0]
        assert request.method == "GET"
        assert request.headers["authorization"].startswith("Basic ")
        assert "index.php?/api/v2/get_case/1" in str(request.url)

    def test_post_sends_json_body(self) -> None:
        seen: List[httpx.Request] = []
        client = _client(lambda r: httpx.Response(200, json={"id": 9}), seen)

        asyncio.run(_run(lambda c: c.post("add_case/3", {"title": "New"}))(client))

        assert seen[0].method == "POST"
        assert json.loads(seen[0].content) == {"title": "New"}

    def test_post_without_body_sends_empty_object(self) -> None:
        seen: List[httpx.Request] = []
        client = _client(lambda r: httpx.Response(200, content=b""), seen)

        result = asyncio.run(_run(lambda c: c.post("delete_case/3"))(client))

        assert result is None
        assert json.loads(seen[0].content) == {}

    def test_get_list_unwraps_paginated_payload(self) -> None:
        payload = {"offset": 0, "limit": 250, "size": 2, "cases": [{"id": 1}, {"id": 2}]}
        client = _client(lambda r: httpx.Response(200, json=payload), [])

        result = asyncio.run(_run(lambda c: c.get_list("get_cases/1", "cases"))(client))
        assert result == [{"id": 1}, {"id": 2}]

    def test_get_list_accepts_bare_array(self) -> None:
        client = _client(lambda r: httpx.Response(200, json=[{"id": 1}]), [])
        result = asyncio.run(_run(lambda c: c.get_list("get_suites/1", "suites"))(client))
        assert result == [{"id": 1}]


class TestErrors:
    def test_error_status_raises_with_body(self) -> None:
        body = '{"error": "Field :case_id is not a valid test case."}'
        client = _client(lambda r: httpx.Response(400, text=body), [])

        with pytest.raises(errors.TestrailApiError) as exc_info:
            asyncio.run(_run(lambda c: c.get("get_case/999"))(client))

        assert exc_info.value.status_code == 400
        assert exc_info.value.response_body == body
        assert "HTTP 400" in str(exc_info.value)

    def test_not_found_detection(self) -> None:
        assert errors.TestrailApiError("x", 404).is_not_found
        assert errors.TestrailApiError("x", 400, '{"error": "Project does not exist"}').is_not_found
        assert not errors.TestrailApiError("x", 400, '{"error": "bad field"}').is_not_found

    def test_authentication_detection(self) -> None:
        assert errors.TestrailApiError("x", 401).is_authentication_error
        assert errors.TestrailApiError("x", 403).is_authentication_error
        assert not errors.TestrailApiError("x", 500).is_authentication_error

    def test_transport_failure_wrapped(self) -> None:
        def boom(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = _client(boom, [])
        with pytest.raises(errors.TestrailApiError) as exc_info:
            asyncio.run(_run(lambda c: c.get("get_projects"))(client))
        assert exc_info.value.status_code == 0
        assert "Failed to call TestRail API" in str(exc_info.value)

    def test_non_json_response_raises(self) -> None:
        client = _client(lambda r: httpx.Response(200, text="<html>login</html>"), [])
        with pytest.raises(errors.TestrailApiError):
            asyncio.run(_run(lambda c: c.get("get_projects"))(client))


class TestCompact:
    def test_renames_and_skips_missing(self) -> None:
        values = {"title": "T", "priorityId": 3}
        assert compact(values, {"title": "title", "priorityId": "priority_id", "refs": "refs"}) == {
            "title": "T",
            "priority_id": 3,
        }

    def test_extract_list_unknown_shape(self) -> None:
        assert TestrailClient.extract_list({"other": []}, "cases") == []
        assert TestrailClient.extract_list(None, "cases") == []
