"""Webhook reconciliation.

Makes the hub's webhook for a channel match what this process expects.
The hub cannot change a webhook's callback URL in place, so a webhook
pointing elsewhere (e.g. a developer's previous IP) is deleted and recreated.

Registration is best-effort: failures are reported and swallowed so an
unreachable hub does not prevent the application from starting.
"""

import logging

from .errors import HubNotFoundError
from .models import ReconcileOutcome, WebhookDescriptor
from .ports import ErrorReporterPort, HubPort

logger = logging.getLogger(__name__)


class WebhookReconciler:
    """Ensures a webhook exists on the hub with the expected callback URL."""

    def __init__(self, hub: HubPort, error_reporter: ErrorReporterPort):
        self.hub = hub
        self.error_reporter = error_reporter

    async def ensure(self, desired: WebhookDescriptor) -> ReconcileOutcome:
        """Create, replace, or leave the webhook described by desired.

        Never raises; failures are handed to the error reporter and result
        in ReconcileOutcome.FAILED.
        """
        channel = desired.channel_name

        try:
            existing = await self.hub.get_webhook(desired.name)
        except HubNotFoundError:
            logger.info(
                f"Creating nonexistent webhook {desired.name}",
                extra={"channel": channel, "callback_url": desired.callback_url},
            )
            return await self._create(desired)
        except Exception as e:
            self.error_reporter.report(e, channel=channel, stage="lookup")
            return ReconcileOutcome.FAILED

        if existing.callback_url == desired.callback_url:
            logger.debug(f"Webhook {desired.name} already configured for {channel}")
            return ReconcileOutcome.UNCHANGED

        logger.info(
            f"Updating webhook {desired.name} callback URL from "
            f"{existing.callback_url} to {desired.callback_url}",
            extra={"channel": channel},
        )

        try:
            await self.hub.delete_webhook(desired.name)
        except Exception as e:
            self.error_reporter.report(e, channel=channel, stage="delete")
            return ReconcileOutcome.FAILED

        logger.info(f"Deleted hub webhook {desired.name}")
        outcome = await self._create(desired)
        if outcome is ReconcileOutcome.CREATED:
            return ReconcileOutcome.REPLACED
        return outcome

    async def _create(self, desired: WebhookDescriptor) -> ReconcileOutcome:
        try:
            await self.hub.create_webhook(desired)
        except Exception as e:
            self.error_reporter.report(e, channel=desired.channel_name, stage="create")
            return ReconcileOutcome.FAILED

        logger.info(f"Created hub webhook for {desired.name}")
        return ReconcileOutcome.CREATED
