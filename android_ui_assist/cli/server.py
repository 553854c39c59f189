"""server CLI command"""

from android_ui_assist.mcp_server.server import run_server

def run_server_command(args):
    run_server(transport=args.transport, host=args.host, port=args.port)
