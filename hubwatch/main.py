"""Composition root for the hub watcher.

This module is the ONLY location that imports both core domain logic
and concrete adapter implementations. All wiring of dependencies
happens here, creating a clear entry point for the application.

Module Structure:
- Configuration loading via config module
- Adapter instantiation
- Channel watcher initialization
- Callback server startup
"""

import asyncio
import json
import logging
import sys
from typing import Any

from hubwatch.adapters.http.aiohttp_server import AiohttpCallbackServer
from hubwatch.adapters.hub.httpx_client import HttpxHubClient
from hubwatch.adapters.network.interfaces import psutil_interfaces
from hubwatch.config import Settings, load_settings
from hubwatch.core.address import LocalAddressResolver
from hubwatch.core.reporting import LoggingErrorReporter
from hubwatch.core.watcher import ChannelWatcher

logger = logging.getLogger(__name__)


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).
    """
    level = getattr(logging, log_level, logging.INFO)

    if log_format == "json":
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "name": "%(name)s", "message": "%(message)s"}'
    else:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )


async def log_item(content: Any, uri: str) -> None:
    """Default item handler: log each item received from the hub."""
    if not isinstance(content, str):
        content = json.dumps(content, default=str)
    logger.info(f"Received hub item {uri}: {content[:500]}")


def build_watcher(settings: Settings, server: AiohttpCallbackServer) -> ChannelWatcher:
    """Wire a ChannelWatcher from settings.

    Raises:
        ConfigurationError: If the settings are incomplete.
    """
    environment = settings.runtime_environment()
    return ChannelWatcher(
        router=server,
        config=settings.watcher_config(),
        environment=environment,
        address_resolver=LocalAddressResolver(environment, psutil_interfaces),
        hub_factory=HttpxHubClient.from_options,
        error_reporter=LoggingErrorReporter(),
    )


async def bootstrap() -> None:
    """Load configuration, wire adapters, and start serving callbacks.

    Steps:
    1. Load configuration from environment
    2. Configure logging
    3. Instantiate the callback server and channel watcher
    4. Watch configured channels
    5. Serve until cancelled
    """
    settings = load_settings()

    configure_logging(settings.log_level, settings.log_format)
    logger.info(f"Loading hub watcher ({settings.environment})...")

    server = AiohttpCallbackServer(host=settings.listen_host, port=settings.listen_port)
    watcher = build_watcher(settings, server)

    if not settings.watch_channels:
        logger.warning("No channels configured; set WATCH_CHANNELS to watch hub channels")

    try:
        for channel in settings.watch_channels:
            outcome = await watcher.watch_channel(channel, log_item)
            logger.info(f"Watching channel {channel} (webhook {outcome.value if outcome else 'already watched'})")

        await server.start()

        while True:
            await asyncio.sleep(3600)
    finally:
        await server.stop()
        await watcher.close()


def main() -> None:
    """Application entry point.

    Exit codes:
        0: Successful shutdown
        1: Fatal bootstrap or runtime error
        130: Interrupted by user (SIGINT/KeyboardInterrupt)
    """
    try:
        asyncio.run(bootstrap())
    except KeyboardInterrupt:
        logger.warning("Shutdown requested by user (SIGINT)")
        sys.exit(130)
    except asyncio.CancelledError:
        logger.info("Graceful shutdown completed")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
