"""Android UI Assist MCP Server - screenshots and device listing over ADB."""

import asyncio
from typing import Annotated, Literal, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field
from starlette.responses import JSONResponse

from android_ui_assist.adb.errors import BridgeError, format_error_for_response
from android_ui_assist.mcp_server.backend import (
    capture_screenshot_response,
    list_devices_response,
    load_server_config,
)
from android_ui_assist.utils import logger

SERVER_NAME = "android-ui-assist-mcp"


mcp = FastMCP(
    name=SERVER_NAME,
    instructions="""
    Android UI Assist MCP Server gives access to Android devices and emulators through ADB.
    Use list_android_devices to see what is connected and take_android_screenshot to capture
    the current screen as a base64 encoded PNG.
    """
)


@mcp.custom_route(path="/", methods=["GET"])
async def health_check(request):
    """Health check endpoint for root path."""
    return JSONResponse({
        "status": "ok",
        "service": SERVER_NAME,
        "endpoint": "/mcp"
    })


async def _run_blocking(func, *args):
    # adb calls block; keep them off the event loop
    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(None, func, *args)
    except BridgeError as e:
        logger.debug(f"[MCP] {func.__name__} failed: {e.kind.value}: {e.message}")
        raise ToolError(format_error_for_response(e)) from e
    except Exception as e:
        logger.error(f"[MCP] {func.__name__} failed: {e!r}")
        raise ToolError(format_error_for_response(e)) from e


@mcp.tool
async def take_android_screenshot(
    deviceId: Annotated[
        Optional[str],
        Field(description="The ID of the Android device to capture a screenshot from. If not provided, uses the first available device."),
    ] = None,
    format: Annotated[
        Literal["png"],
        Field(description="The image format for the screenshot. Currently only PNG is supported."),
    ] = "png",
) -> dict:
    """
    Capture a screenshot from an Android device or emulator.

    Returns:
        Dictionary containing:
        - data: Base64 encoded PNG
        - format: "png"
        - width / height: Image size in pixels
        - deviceId: Requested device ID, or "default" when none was given
        - timestamp: Capture time in Unix milliseconds
    """
    return await _run_blocking(capture_screenshot_response, deviceId)


@mcp.tool
async def list_android_devices() -> dict:
    """List all connected Android devices and emulators."""
    return await _run_blocking(list_devices_response)


def run_server(transport: Optional[str] = None, host: Optional[str] = None, port: Optional[int] = None):
    """
    Run the MCP server.

    Args:
        transport: "stdio" or "http" (default: server.transport from config)
        host: HTTP bind address (default: server.host from config)
        port: HTTP port (default: server.port from config)
    """
    server_config = load_server_config()["server"]
    transport = transport or server_config["transport"]

    if transport == "stdio":
        logger.info("[MCP Server] Android UI Assist MCP server started (stdio)")
        mcp.run()
    elif transport == "http":
        import uvicorn

        host = host or server_config["host"]
        port = port if port is not None else int(server_config["port"])
        logger.info(f"[MCP Server] Starting server: http://{host}:{port}/mcp")
        uvicorn.run(mcp.http_app(), host=host, port=port)
    else:
        raise ValueError(f"Unsupported transport: {transport}")


if __name__ == "__main__":
    run_server()
