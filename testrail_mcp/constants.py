"""Shared constants for TestRail MCP."""

SERVER_NAME = "TestRail MCP"
SERVER_VERSION = "0.1.0"

# Network defaults
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 9000
DEFAULT_TRANSPORT = "stdio"

# SSE transport paths
SSE_PATH = "/sse"
POST_MESSAGES_PATH = "/messages/"

# Logging defaults
LOG_DIR = "logs"
DEFAULT_LOG_LEVEL = "INFO"

# TestRail API
API_PATH = "index.php?/api/v2/"
DEFAULT_API_TIMEOUT = 30.0

# Gateway defaults
DEFAULT_SEARCH_LIMIT = 10
MAX_SEARCH_LIMIT = 50
