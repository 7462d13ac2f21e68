"""Error taxonomy for the hub watcher.

Configuration errors are fatal and raised at construction time. Hub errors
are raised by HubPort adapters; a 404 lookup is reported as HubNotFoundError
so reconciliation can take the create path. Notification and handler errors
are per-request and never reach the HTTP layer.
"""


class HubWatchError(Exception):
    """Base class for all hub watcher errors."""


class ConfigurationError(HubWatchError):
    """Missing or invalid configuration. The process should not start."""


class AddressResolutionError(ConfigurationError):
    """No routable local address could be determined."""


class HubError(HubWatchError):
    """A hub request failed.

    Attributes:
        status_code: HTTP status returned by the hub, or None when the
            request never produced a response (connection refused, timeout).
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class HubNotFoundError(HubError):
    """The requested hub resource does not exist."""

    def __init__(self, message: str):
        super().__init__(message, status_code=404)


class NotificationError(HubWatchError):
    """An inbound notification could not be processed."""


class HandlerError(HubWatchError):
    """An application handler failed while processing an item."""

    def __init__(self, channel: str, uri: str, cause: BaseException):
        super().__init__(f"Error running {channel} callback handler for {uri}: {cause}")
        self.channel = channel
        self.uri = uri
        self.cause = cause
