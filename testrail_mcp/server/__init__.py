"""MCP server surface: handlers, lifespan, transports and the ASGI app."""
