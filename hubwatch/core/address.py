"""Local address resolution for callback URLs.

When the application host is configured as ``localhost`` the hub cannot
reach it, so callback URLs and per-developer webhook names embed an address
of this machine instead. The address is resolved once and cached.
"""

import ipaddress
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .errors import AddressResolutionError
from .models import RuntimeEnvironment

logger = logging.getLogger(__name__)

PREFERRED_DEVELOPMENT_NETWORK = ipaddress.ip_network("10.0.0.0/8")


@dataclass(frozen=True)
class InterfaceAddress:
    """One address bound to a local network interface."""

    interface: str
    family: str  # "IPv4" or "IPv6"
    address: str


InterfaceEnumerator = Callable[[], Iterable[InterfaceAddress]]


def _is_candidate(entry: InterfaceAddress) -> bool:
    """Skip over internal (i.e. 127.0.0.1) and non-IPv4 addresses."""
    if entry.family != "IPv4":
        return False
    try:
        address = ipaddress.IPv4Address(entry.address)
    except ValueError:
        return False
    return not address.is_loopback and not address.is_unspecified


class LocalAddressResolver:
    """Resolves and caches the address to advertise to the hub.

    Resolution order:
    1. The IP override from the runtime environment, used verbatim.
    2. The first non-loopback IPv4 interface address. In development a
       10.x.x.x address is preferred when one exists.
    """

    def __init__(
        self,
        environment: RuntimeEnvironment,
        interfaces: InterfaceEnumerator,
    ):
        """Initialize the resolver.

        Args:
            environment: Runtime environment supplying the name and override.
            interfaces: Callable enumerating local interface addresses.
        """
        self.environment = environment
        self.interfaces = interfaces
        self._address: str | None = None

    def resolve(self) -> str:
        """Return the local address, scanning interfaces on first use.

        Raises:
            AddressResolutionError: If no usable address exists.
        """
        if self._address:
            return self._address

        if self.environment.ip_override:
            self._address = self.environment.ip_override
            logger.info(
                f"Using IP environment variable for hub webhook: {self._address}"
            )
            return self._address

        address = self._scan()
        if not address:
            raise AddressResolutionError(
                "Unable to get local IP address. "
                "Set the IP environment variable to your 10.x.x.x address."
            )

        logger.info(f"Detected local IP address: {address}")
        self._address = address
        return address

    def reset(self) -> None:
        """Forget the cached address so the next resolve() rescans."""
        self._address = None

    def _scan(self) -> str | None:
        first: str | None = None
        prefer_private = self.environment.name == "development"

        for entry in self.interfaces():
            if not _is_candidate(entry):
                continue
            if prefer_private and ipaddress.IPv4Address(entry.address) in PREFERRED_DEVELOPMENT_NETWORK:
                return entry.address
            if first is None:
                first = entry.address
                if not prefer_private:
                    break

        return first
