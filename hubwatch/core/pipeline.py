"""Per-notification callback pipeline.

Each hub notification moves through parse, fetch and dispatch before it is
acknowledged. Any failure short-circuits to a FAILURE acknowledgment; the
pipeline itself never raises.
"""

import inspect
import logging
from collections.abc import Mapping
from typing import Any

from .errors import HandlerError, NotificationError
from .models import Acknowledgment, NotificationPayload
from .ports import ErrorReporterPort, HubPort, ItemHandler

logger = logging.getLogger(__name__)


class CallbackPipeline:
    """Processes notifications for a single channel."""

    def __init__(
        self,
        channel: str,
        handler: ItemHandler,
        hub: HubPort,
        error_reporter: ErrorReporterPort,
    ):
        self.channel = channel
        self.handler = handler
        self.hub = hub
        self.error_reporter = error_reporter

    async def handle(self, body: str | bytes | Mapping[str, Any]) -> Acknowledgment:
        """Process one notification body and return the acknowledgment."""
        try:
            payload = NotificationPayload.parse(body)
        except NotificationError as e:
            self.error_reporter.report(e, channel=self.channel, stage="parse")
            return Acknowledgment.FAILURE

        if not callable(self.handler):
            error = NotificationError(
                f"Callback handler for {self.channel} is not callable: "
                f"{type(self.handler).__name__}"
            )
            self.error_reporter.report(error, channel=self.channel, stage="parse")
            return Acknowledgment.FAILURE

        # The URI count is checked before fetching so a multi-item
        # notification never fetches content for the wrong item.
        try:
            uri = payload.single_uri()
        except NotificationError as e:
            self.error_reporter.report(e, channel=self.channel, stage="parse")
            return Acknowledgment.FAILURE

        try:
            item = await self.hub.get_item(uri)
        except Exception as e:
            self.error_reporter.report(e, channel=self.channel, stage="fetch")
            return Acknowledgment.FAILURE

        try:
            result = self.handler(item.content, uri)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            error = HandlerError(self.channel, uri, e)
            error.__cause__ = e
            self.error_reporter.report(error, channel=self.channel, stage="dispatch")
            return Acknowledgment.FAILURE

        logger.debug(f"Processed {uri} for channel {self.channel}")
        return Acknowledgment.SUCCESS
