"""Channel watcher: the entry point applications use to watch hub channels.

Example:

    watcher = ChannelWatcher(
        router=callback_server,
        config=WatcherConfig(
            webhook_name="wma_email_sender",
            hub_host=FixedHost("http://hub.iad.dev.example.io"),
            app_host=FixedHost("http://localhost:3001"),
            hub_parallel_calls=2,
        ),
        environment=RuntimeEnvironment(),
        address_resolver=resolver,
        hub_factory=HttpxHubClient.from_options,
    )
    await watcher.watch_channel("wma_email_outbox", send_email)
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any, Protocol

from .errors import ConfigurationError
from .models import (
    ChannelWatch,
    ReconcileOutcome,
    RuntimeEnvironment,
    WatcherConfig,
    WebhookDescriptor,
    resolve_host,
)
from .naming import callback_route, callback_url, webhook_name
from .pipeline import CallbackPipeline
from .ports import ErrorReporterPort, HubPort, ItemHandler, RouteRegistrarPort
from .reconciler import WebhookReconciler
from .reporting import LoggingErrorReporter

logger = logging.getLogger(__name__)

HubFactory = Callable[[str, Mapping[str, Any]], HubPort]


class AddressResolver(Protocol):
    def resolve(self) -> str: ...


class ChannelWatcher:
    """Registers callback routes and hub webhooks for watched channels."""

    def __init__(
        self,
        router: RouteRegistrarPort,
        config: WatcherConfig,
        environment: RuntimeEnvironment,
        address_resolver: AddressResolver,
        hub_factory: HubFactory,
        error_reporter: ErrorReporterPort | None = None,
    ):
        """Initialize the watcher.

        Args:
            router: Hosting HTTP server; must implement add_post().
            config: Watcher configuration.
            environment: Runtime environment (name, user, IP override).
            address_resolver: Source of the local address for localhost hosts.
            hub_factory: Builds the hub client from the resolved hub host and
                the configured client options.
            error_reporter: Receives recovered errors. Defaults to logging.

        Raises:
            ConfigurationError: If the router lacks add_post() or the config
                is incomplete for the current environment.
        """
        if router is None:
            raise ConfigurationError("HubWatcher: Missing HTTP router")
        if not callable(getattr(router, "add_post", None)):
            raise ConfigurationError("HubWatcher: HTTP router must implement add_post()")
        if config is None:
            raise ConfigurationError("HubWatcher: Missing config")
        config.validate(environment.name)
        hub_host = resolve_host(config.hub_host, environment.name)
        app_host = resolve_host(config.app_host, environment.name)
        if hub_host is None or app_host is None:
            raise ConfigurationError(
                f"HubWatcher config: Missing hosts for {environment.name}"
            )

        self.router = router
        self.config = config
        self.environment = environment
        self.address_resolver = address_resolver
        self.hub_factory = hub_factory
        self.error_reporter = error_reporter or LoggingErrorReporter()
        self._watches: dict[str, ChannelWatch] = {}
        self._hub: HubPort | None = None
        self._hub_host = hub_host
        self._app_host = app_host

    @property
    def hub_host(self) -> str:
        return self._hub_host

    @property
    def app_host(self) -> str:
        return self._app_host

    @property
    def hub(self) -> HubPort:
        """The hub client, created on first use."""
        if self._hub is None:
            self._hub = self.hub_factory(self.hub_host, self.config.client_options)
        return self._hub

    @property
    def watched_channels(self) -> tuple[str, ...]:
        """Names of channels whose webhook registration has settled."""
        return tuple(name for name, watch in self._watches.items() if watch.watched)

    async def watch_channel(
        self, channel: str, handler: ItemHandler
    ) -> ReconcileOutcome | None:
        """Watch a hub channel, invoking handler for every new item.

        The callback route is registered on every call. The hub webhook is
        reconciled only the first time a channel is watched.

        Returns:
            The reconciliation outcome, or None if the channel was already
            watched.

        Raises:
            ConfigurationError: If handler is not callable.
        """
        if not isinstance(handler, ItemHandler):
            raise ConfigurationError(
                f"Callback handler for {channel} is not callable: {type(handler).__name__}"
            )

        route = callback_route(channel)
        logger.info(f"Registering callback route: {route}")
        pipeline = CallbackPipeline(channel, handler, self.hub, self.error_reporter)
        self.router.add_post(route, pipeline.handle)

        watch = self._watches.get(channel)
        if watch is not None and watch.watched:
            watch.handler = handler
            logger.info(f"Webhook already initialized for {channel}")
            return None

        if watch is None:
            watch = ChannelWatch(channel=channel, handler=handler)
            self._watches[channel] = watch

        reconciler = WebhookReconciler(self.hub, self.error_reporter)
        outcome = await reconciler.ensure(self.build_descriptor(channel))
        watch.watched = True
        return outcome

    def build_descriptor(self, channel: str) -> WebhookDescriptor:
        """Return the webhook this process expects the hub to have for channel."""
        return WebhookDescriptor(
            name=webhook_name(
                self.config.webhook_name,
                self.environment,
                self.address_resolver.resolve,
            ),
            channel_name=channel,
            callback_url=callback_url(
                channel, self.app_host, self.address_resolver.resolve
            ),
            parallel_calls=self.config.hub_parallel_calls,
            start_item=self.config.start_item,
        )

    async def close(self) -> None:
        """Close the hub client if one was created."""
        if self._hub is not None:
            await self._hub.close()
            self._hub = None
