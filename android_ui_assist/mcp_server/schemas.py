"""Output models for the MCP tools."""

from typing import List, Optional

from pydantic import BaseModel, Field


class ScreenshotOutput(BaseModel):
    data: str = Field(description="Base64 encoded image data")
    format: str = Field(description="Image format (png)")
    width: int = Field(gt=0, description="Image width in pixels")
    height: int = Field(gt=0, description="Image height in pixels")
    deviceId: str = Field(description="ID of the device the screenshot was taken from")
    timestamp: int = Field(description="Unix timestamp in milliseconds when the screenshot was captured")


class DeviceOutput(BaseModel):
    id: str = Field(description="Device ID")
    status: str = Field(description="Device status")
    model: Optional[str] = Field(default=None, description="Device model")
    product: Optional[str] = Field(default=None, description="Product name")
    transportId: Optional[str] = Field(default=None, description="Transport ID")
    usb: Optional[str] = Field(default=None, description="USB information")
    productString: Optional[str] = Field(default=None, description="Product string")


class DeviceListOutput(BaseModel):
    devices: List[DeviceOutput] = Field(description="List of connected Android devices")
