"""CLI entry point for android-ui-assist"""

import sys
import argparse
from android_ui_assist import __version__
from android_ui_assist.utils import set_quiet, set_verbose

def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="android-ui-assist",
        description="Android UI Assist - ADB screenshots and device listing over MCP",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  android-ui-assist server
  android-ui-assist server --transport http --port 8704
  android-ui-assist devices --json
  android-ui-assist screenshot --device emulator-5554 --output screen.png
        """
    )
    parser.add_argument("--version", action="version", version=f"android-ui-assist {__version__}")
    parser.add_argument("--config", help="Path to server_config.yaml")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only show warnings and errors")

    subparsers = parser.add_subparsers(dest="command", help="Available commands", metavar="COMMAND")

    # server
    server_parser = subparsers.add_parser("server", help="Start the MCP server")
    server_parser.add_argument("--transport", choices=["stdio", "http"], help="Transport (default from config: stdio)")
    server_parser.add_argument("--host", help="HTTP bind address")
    server_parser.add_argument("--port", type=int, help="HTTP port")

    # devices
    devices_parser = subparsers.add_parser("devices", help="List connected devices")
    devices_parser.add_argument("--json", action="store_true", help="Print the raw JSON response")

    # screenshot
    screenshot_parser = subparsers.add_parser("screenshot", help="Capture a screenshot once")
    screenshot_parser.add_argument("--device", help="Device ID (default: first available device)")
    screenshot_parser.add_argument("--output", "-o", help="Write the PNG to this file")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    set_verbose(args.verbose)
    set_quiet(args.quiet)

    if args.config:
        from android_ui_assist.mcp_server.backend import load_server_config
        load_server_config(args.config)

    if args.command == "server":
        from android_ui_assist.cli.server import run_server_command
        run_server_command(args)
    elif args.command == "devices":
        from android_ui_assist.cli.devices import run_devices
        run_devices(args)
    elif args.command == "screenshot":
        from android_ui_assist.cli.screenshot import run_screenshot
        run_screenshot(args)

if __name__ == "__main__":
    main()
