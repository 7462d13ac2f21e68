"""Core domain logic for the hub watcher.

This package contains zero external dependencies and represents
the pure business logic of the application. All adapters and
external integrations are handled by the adapters package.
"""

from .errors import (
    AddressResolutionError,
    ConfigurationError,
    HandlerError,
    HubError,
    HubNotFoundError,
    HubWatchError,
    NotificationError,
)
from .models import (
    Acknowledgment,
    ChannelWatch,
    FixedHost,
    HostSetting,
    HubItem,
    NotificationPayload,
    PerEnvironmentHost,
    ReconcileOutcome,
    RuntimeEnvironment,
    WatcherConfig,
    WebhookDescriptor,
)

__all__ = [
    "Acknowledgment",
    "AddressResolutionError",
    "ChannelWatch",
    "ConfigurationError",
    "FixedHost",
    "HandlerError",
    "HostSetting",
    "HubError",
    "HubItem",
    "HubNotFoundError",
    "HubWatchError",
    "NotificationError",
    "NotificationPayload",
    "PerEnvironmentHost",
    "ReconcileOutcome",
    "RuntimeEnvironment",
    "WatcherConfig",
    "WebhookDescriptor",
]
