"""Port interfaces for the hub watcher.

These abstract base classes define the boundaries between core
domain logic and external adapters. Implementations live in the
adapters/ package.

Port Interface Categories:

1. **Driven Ports** (core calls out to adapters)
   - HubPort: Webhook management and item retrieval on the remote hub
   - RouteRegistrarPort: Route registration on the hosting HTTP server
   - ErrorReporterPort: Best-effort error reporting

2. **Capabilities** (supplied by the application)
   - ItemHandler: Application callback invoked once per hub item
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any, Protocol, runtime_checkable

from .models import Acknowledgment, HubItem, WebhookDescriptor


@runtime_checkable
class ItemHandler(Protocol):
    """Application handler for hub items.

    Called with the decoded item content and the item URI. May return an
    awaitable; the watcher awaits it before acknowledging the notification.
    Raising (or returning an awaitable that raises) marks the notification
    as failed.
    """

    def __call__(self, content: Any, uri: str) -> Awaitable[Any] | Any: ...


CallbackRoute = Callable[[Any], Awaitable[Acknowledgment]]


class HubPort(ABC):
    """Port for talking to the remote event hub.

    Implementations must raise HubNotFoundError when a webhook lookup finds
    nothing, and HubError (with the HTTP status when one is available) for
    every other failure.
    """

    @abstractmethod
    async def get_webhook(self, name: str) -> WebhookDescriptor:
        """Retrieve a webhook by its qualified name.

        Raises:
            HubNotFoundError: If no webhook has this name.
            HubError: If the hub is unreachable or returns an error.
        """

    @abstractmethod
    async def create_webhook(self, descriptor: WebhookDescriptor) -> None:
        """Create a webhook on the hub.

        Raises:
            HubError: If the hub rejects the webhook or is unreachable.
        """

    @abstractmethod
    async def delete_webhook(self, name: str) -> None:
        """Delete a webhook by its qualified name.

        Raises:
            HubError: If the hub is unreachable or returns an error.
        """

    @abstractmethod
    async def get_item(self, uri: str) -> HubItem:
        """Fetch the content of a single channel item.

        Args:
            uri: Item URI as delivered in a webhook notification.

        Raises:
            HubError: If the item cannot be fetched.
        """

    async def close(self) -> None:
        """Release any resources held by the adapter."""


class RouteRegistrarPort(ABC):
    """Port for registering callback routes on the hosting HTTP server.

    Registering the same path again replaces the previous handler.
    """

    @abstractmethod
    def add_post(self, path: str, handler: CallbackRoute) -> None:
        """Register handler for POST requests to path.

        Args:
            path: Absolute URL path, e.g. "/hub-callbacks/orders".
            handler: Coroutine receiving the raw request body and returning
                the acknowledgment to send back.
        """


class ErrorReporterPort(ABC):
    """Port for reporting errors the watcher recovers from.

    Reconciliation and the callback pipeline never propagate errors; they
    hand them here instead.
    """

    @abstractmethod
    def report(self, error: BaseException, *, channel: str, stage: str) -> None:
        """Report a recovered error.

        Args:
            error: The exception that was caught.
            channel: Channel the error relates to.
            stage: Processing stage, e.g. "lookup", "create", "fetch".
        """
