"""MCP server exposing the ADB bridge."""
