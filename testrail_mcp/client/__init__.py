"""TestRail REST API client."""

from testrail_mcp.client.api_client import TestrailClient, compact

__all__ = ["TestrailClient", "compact"]
