"""
Roku Local Bridge - Main Entry Point
"""

import asyncio
import logging
import os
import signal
import sys
from pathlib import Path

import yaml

from config_loader import get_sample_config
from services.bridge_server import RokuBridgeServer

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = 'config/config.yaml'


def ensure_config(config_path: str) -> bool:
    """Write the sample configuration if none exists; True when a file was created"""
    config_file = Path(config_path)
    if config_file.exists():
        return False

    config_file.parent.mkdir(parents=True, exist_ok=True)
    with open(config_file, 'w') as f:
        yaml.safe_dump(get_sample_config(), f, sort_keys=False)
    return True


async def main():
    """Main entry point"""
    server = None
    loop = asyncio.get_running_loop()

    def request_shutdown(signum):
        logger.info(f"Received {signal.Signals(signum).name}, shutting down bridge...")
        if server:
            loop.create_task(server.stop())

    for signum in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(signum, request_shutdown, signum)

    try:
        config_path = os.environ.get('CONFIG_FILE', DEFAULT_CONFIG_PATH)
        if ensure_config(config_path):
            # Logging is configured by the server, so this goes to stderr
            print(f"No configuration at {config_path}, wrote sample config; edit the devices list and restart")
        server = RokuBridgeServer(config_path=config_path)
        logger.info(f"Bridge configured from {config_path} with {len(server.config.get('devices', []))} static device(s)")

        await server.start()

    except Exception as e:
        logger.error(f"Bridge failed: {e}")
        return 1
    finally:
        if server:
            await server.stop()

    return 0


def run():
    Path("logs").mkdir(exist_ok=True)

    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\nBridge stopped by user")
        sys.exit(0)


if __name__ == "__main__":
    run()
