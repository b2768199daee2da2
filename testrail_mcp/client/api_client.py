"""Async client for the TestRail REST API v2.

TestRail addresses every endpoint through the query string
(``index.php?/api/v2/get_case/1&suite_id=2``), so URLs are assembled here
rather than relying on httpx's base-URL merging.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import urlencode

import httpx

from testrail_mcp.config.schema import TestrailSettings
from testrail_mcp.errors import TestrailApiError

logger = logging.getLogger(__name__)

_MAX_BODY_IN_MESSAGE = 500


def _encode_param(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (list, tuple)):
        return ",".join(_encode_param(v) for v in value)
    return str(value)


class TestrailClient:
    """Thin async wrapper around :class:`httpx.AsyncClient`.

    Parameters
    ----------
    settings:
        Connection settings (URL, credentials, timeout).
    transport:
        Optional httpx transport, used by tests to stub the server.
    """

    __test__ = False  # not a pytest class despite the name

    def __init__(
        self,
        settings: TestrailSettings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_url = settings.api_url
        self._client = httpx.AsyncClient(
            auth=httpx.BasicAuth(settings.username, settings.api_key),
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            timeout=settings.timeout,
            verify=settings.verify_ssl,
            transport=transport,
        )

    # ── lifecycle ───────────────────────────────────────────────────

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "TestrailClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    # ── request plumbing ────────────────────────────────────────────

    def build_url(self, uri: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Full URL for *uri*; ``None`` params are dropped."""
        url = self._api_url + uri.lstrip("/")
        query = {k: _encode_param(v) for k, v in (params or {}).items() if v is not None}
        if query:
            url += "&" + urlencode(query, safe=",")
        return url

    async def _request(
        self,
        method: str,
        uri: str,
        params: Optional[Mapping[str, Any]] = None,
        data: Any = None,
    ) -> Any:
        url = self.build_url(uri, params)
        try:
            if method == "POST":
                resp = await self._client.post(url, json=data if data is not None else {})
            else:
                resp = await self._client.get(url)
        except httpx.HTTPError as exc:
            raise TestrailApiError(f"Failed to call TestRail API: {exc}") from exc

        if resp.is_error:
            body = resp.text
            raise TestrailApiError(
                f"TestRail API returned HTTP {resp.status_code}: {body[:_MAX_BODY_IN_MESSAGE]}",
                status_code=resp.status_code,
                response_body=body,
            )
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise TestrailApiError(
                f"TestRail API returned a non-JSON response for {uri}",
                status_code=resp.status_code,
                response_body=resp.text,
            ) from exc

    async def get(self, uri: str, **params: Any) -> Any:
        logger.debug("GET %s %s", uri, params)
        return await self._request("GET", uri, params=params)

    async def post(self, uri: str, data: Any = None, **params: Any) -> Any:
        logger.debug("POST %s", uri)
        return await self._request("POST", uri, params=params, data=data)

    async def get_list(self, uri: str, field: str, **params: Any) -> List[Any]:
        """GET an endpoint that returns a (possibly paginated) list."""
        return self.extract_list(await self.get(uri, **params), field)

    @staticmethod
    def extract_list(payload: Any, field: str) -> List[Any]:
        """Unwrap ``{"offset", "limit", "size", field: [...]}`` or a bare array."""
        if isinstance(payload, list):
            return payload
        if isinstance(payload, dict):
            items = payload.get(field)
            if isinstance(items, list):
                return items
        return []

    def __repr__(self) -> str:
        return f"TestrailClient(api_url={self._api_url!r})"


def compact(values: Mapping[str, Any], field_map: Mapping[str, str]) -> Dict[str, Any]:
    """Build a request body from *values*, renaming keys via *field_map*.

    Only keys present in *values* (coerced arguments) are included, so
    omitted optional parameters never overwrite server-side data.
    """
    return {api_key: values[arg] for arg, api_key in field_map.items() if arg in values}
