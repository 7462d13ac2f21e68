"""Domain models for the hub watcher.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.
"""

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, TypeAlias

from .errors import ConfigurationError, NotificationError

DEFAULT_ENVIRONMENT = "development"
SHARED_ENVIRONMENTS = frozenset({"staging", "production"})


@dataclass(frozen=True)
class FixedHost:
    """A host used regardless of the deployment environment."""

    value: str


@dataclass(frozen=True)
class PerEnvironmentHost:
    """Hosts keyed by deployment environment name."""

    hosts: Mapping[str, str]

    def __post_init__(self) -> None:
        """Convert hosts mapping to read-only proxy."""
        if isinstance(self.hosts, dict):
            object.__setattr__(self, "hosts", MappingProxyType(dict(self.hosts)))


HostSetting: TypeAlias = FixedHost | PerEnvironmentHost


def host_setting(value: str | Mapping[str, str]) -> HostSetting:
    """Wrap a raw configuration value in the matching HostSetting variant."""
    if isinstance(value, Mapping):
        return PerEnvironmentHost(dict(value))
    return FixedHost(value)


def resolve_host(setting: HostSetting, environment: str) -> str | None:
    """Return the host for the given environment, or None if there is none."""
    if isinstance(setting, PerEnvironmentHost):
        return setting.hosts.get(environment) or None
    return setting.value or None


@dataclass(frozen=True)
class RuntimeEnvironment:
    """Process-level facts that shape webhook naming and callback URLs."""

    name: str = DEFAULT_ENVIRONMENT
    user: str | None = None
    ip_override: str | None = None

    @property
    def is_shared(self) -> bool:
        """True for environments where one webhook serves every host."""
        return self.name in SHARED_ENVIRONMENTS


@dataclass(frozen=True)
class WatcherConfig:
    """Immutable watcher configuration.

    Host values are validated against a particular environment by
    ``validate``; the dataclass itself only checks what is
    environment-independent.
    """

    webhook_name: str
    hub_host: HostSetting
    app_host: HostSetting
    hub_parallel_calls: int = 1
    start_item: str | None = None
    client_options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate config invariants and freeze client options."""
        if not self.webhook_name or not self.webhook_name.strip():
            raise ConfigurationError("HubWatcher config: Missing webhook_name")
        if self.hub_parallel_calls < 1:
            raise ConfigurationError(
                f"hub_parallel_calls must be at least 1, got {self.hub_parallel_calls}"
            )
        if isinstance(self.client_options, dict):
            object.__setattr__(
                self, "client_options", MappingProxyType(dict(self.client_options))
            )

    def validate(self, environment: str) -> None:
        """Raise ConfigurationError if either host is missing for environment."""
        if resolve_host(self.hub_host, environment) is None:
            raise ConfigurationError(
                f'HubWatcher config: Missing "hub_host" or "hub_host.{environment}"'
            )
        if resolve_host(self.app_host, environment) is None:
            raise ConfigurationError(
                f'HubWatcher config: Missing "app_host" or "app_host.{environment}"'
            )


@dataclass(frozen=True)
class WebhookDescriptor:
    """A hub webhook (group callback) as this process expects it to exist."""

    name: str
    channel_name: str
    callback_url: str
    parallel_calls: int = 1
    start_item: str | None = None

    def to_hub_json(self, hub_host: str) -> dict[str, Any]:
        """Build the request body for creating this webhook on the hub."""
        body: dict[str, Any] = {
            "name": self.name,
            "channelUrl": f"{hub_host.rstrip('/')}/channel/{self.channel_name}",
            "callbackUrl": self.callback_url,
            "parallelCalls": self.parallel_calls,
        }
        if self.start_item:
            body["startItem"] = self.start_item
        return body

    @classmethod
    def from_hub_json(cls, data: Mapping[str, Any]) -> "WebhookDescriptor":
        """Build a descriptor from the hub's representation of a webhook."""
        channel_url = str(data.get("channelUrl", ""))
        return cls(
            name=str(data.get("name", "")),
            channel_name=channel_url.rstrip("/").rsplit("/", 1)[-1],
            callback_url=str(data.get("callbackUrl", "")),
            parallel_calls=int(data.get("parallelCalls", 1)),
            start_item=data.get("startItem"),
        )


@dataclass(frozen=True)
class NotificationPayload:
    """Body of a hub webhook notification."""

    uris: tuple[str, ...]
    name: str | None = None
    type: str | None = None

    @classmethod
    def parse(cls, body: str | bytes | Mapping[str, Any]) -> "NotificationPayload":
        """Parse a notification body that may or may not be decoded yet.

        Raises:
            NotificationError: If the body is not valid JSON or not an object,
                or if ``uris`` is not a list of strings.
        """
        if isinstance(body, (str, bytes, bytearray)):
            try:
                data = json.loads(body)
            except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
                raise NotificationError(f"Invalid notification body: {e}") from e
        else:
            data = body

        if not isinstance(data, Mapping):
            raise NotificationError(
                f"Notification body must be an object, got {type(data).__name__}"
            )

        uris = data.get("uris") or []
        if not isinstance(uris, list) or not all(isinstance(u, str) for u in uris):
            raise NotificationError(f'Invalid notification "uris" attribute: {uris!r}')

        return cls(uris=tuple(uris), name=data.get("name"), type=data.get("type"))

    def single_uri(self) -> str:
        """Return the one item URI this notification refers to.

        Raises:
            NotificationError: If the payload does not carry exactly one URI.
        """
        if len(self.uris) != 1:
            raise NotificationError(
                'Expected hub callback "uris" attribute to be length 1 '
                f"but was {json.dumps(list(self.uris))}"
            )
        return self.uris[0]


@dataclass(frozen=True)
class HubItem:
    """Content of a single hub channel item."""

    uri: str
    content: Any
    content_type: str = ""


class Acknowledgment(Enum):
    """HTTP status returned to the hub for a notification."""

    SUCCESS = 200
    FAILURE = 422

    @property
    def status_code(self) -> int:
        return self.value


class ReconcileOutcome(Enum):
    """What webhook reconciliation did for a channel."""

    UNCHANGED = "unchanged"
    CREATED = "created"
    REPLACED = "replaced"
    FAILED = "failed"


@dataclass
class ChannelWatch:
    """A channel this process has been asked to watch."""

    channel: str
    handler: Callable[..., Any]
    watched: bool = False
