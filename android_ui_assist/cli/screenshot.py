"""screenshot CLI command"""

import base64
import sys
from pathlib import Path

from android_ui_assist.adb.errors import BridgeError
from android_ui_assist.cli.utils import print_error, print_screenshot
from android_ui_assist.mcp_server.backend import capture_screenshot_response

def run_screenshot(args):
    try:
        result = capture_screenshot_response(device_id=args.device)
    except BridgeError as e:
        print_error(e)
        sys.exit(1)

    if args.output:
        Path(args.output).write_bytes(base64.b64decode(result["data"]))

    print_screenshot(result, args.output)
