"""devices CLI command"""

import json
import sys

from android_ui_assist.adb.errors import BridgeError
from android_ui_assist.cli.utils import print_devices, print_error
from android_ui_assist.mcp_server.backend import list_devices_response

def run_devices(args):
    try:
        result = list_devices_response()
    except BridgeError as e:
        print_error(e)
        sys.exit(1)

    if args.json:
        print(json.dumps(result, indent=2, ensure_ascii=False))
    else:
        print_devices(result)
