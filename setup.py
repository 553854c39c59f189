#!/usr/bin/env python3
"""Setup script for android-ui-assist."""

from setuptools import find_packages, setup

with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="android-ui-assist-mcp",
    version="1.0.0",
    description="MCP server for capturing Android screenshots and listing devices over ADB",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["android_ui_assist*"]),
    package_data={"android_ui_assist.mcp_server": ["server_config.yaml"]},
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Testing",
        "Topic :: Software Development :: Debuggers",
    ],
    python_requires=">=3.10",
    install_requires=[
        "PyYAML>=6.0",
        "pydantic>=2.12.5",
        "starlette>=0.50.0",
        "mcp>=1.0.0",
        "fastmcp>=2.10.0",
        "uvicorn>=0.20.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "Pillow>=12.0.0",
            "black>=23.0.0",
            "ruff>=0.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "android-ui-assist=android_ui_assist.__main__:main",
        ],
    },
)
