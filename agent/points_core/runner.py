"""
Entry point — GUI window by default, --headless for servers.
"""

import argparse
import time

from .constants import AGENT_VERSION
from .config import log, safe_print, setup_logging, load_settings, server_url
from .api import AccountClient
from .controller import LifecycleController
from .scheduler import ThreadScheduler


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="CashPlay points agent")
    parser.add_argument("--headless", action="store_true",
                        help="run with the saved settings, without a window")
    parser.add_argument("--server", default=None,
                        help="points API base URL (default: $CASHPLAY_SERVER_URL)")
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    return parser.parse_args(argv)


def run_headless(client, settings):
    """Poll with the saved settings until Ctrl+C. Returns a process exit code."""
    controller = LifecycleController(client, ThreadScheduler())
    if not controller.start(settings):
        safe_print(f"Invalid settings: {controller.validation_error.message}")
        return 2

    try:
        while controller.is_running:
            time.sleep(1)
    except KeyboardInterrupt:
        safe_print("\nAgent stopped by user.")
    finally:
        controller.stop()
    return 0


def run_window(client, settings):
    import tkinter as tk
    from .window import PointsWindow, TkScheduler

    root = tk.Tk()
    controller = LifecycleController(client, TkScheduler(root))
    PointsWindow(root, controller, settings).build()
    try:
        root.mainloop()
    finally:
        controller.stop()
    return 0


def main(argv=None):
    """Primary agent entry point."""
    args = parse_args(argv)
    setup_logging(debug=args.debug)
    safe_print("CashPlay Points Agent v" + AGENT_VERSION)

    settings = load_settings()
    client = AccountClient(base_url=args.server or server_url())
    log.info("Using points API at %s", client.base_url)

    try:
        if args.headless:
            return run_headless(client, settings)
        return run_window(client, settings)
    finally:
        client.close()
        log.info("Agent shut down.")
