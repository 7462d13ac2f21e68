"""Naming rules for callback routes, callback URLs and webhook names."""

import re
from collections.abc import Callable
from urllib.parse import quote, urlsplit, urlunsplit

from .models import RuntimeEnvironment

CALLBACK_ROUTE_PREFIX = "/hub-callbacks"
LOCALHOST = "localhost"

_REPEATED_SLASHES = re.compile(r"/{2,}")
_PATH_SAFE_CHARS = "/:@!$&'()*+,;=-._~%"

AddressSource = Callable[[], str]


def callback_route(channel: str) -> str:
    """Return the local HTTP path the hub posts notifications for channel to."""
    return f"{CALLBACK_ROUTE_PREFIX}/{channel}"


def sanitize_url(url: str) -> str:
    """Normalize a URL string.

    Strips surrounding whitespace, collapses repeated path separators and
    percent-encodes characters that are not valid in a URL path.
    """
    parts = urlsplit(url.strip())
    path = _REPEATED_SLASHES.sub("/", parts.path)
    path = quote(path, safe=_PATH_SAFE_CHARS)
    return urlunsplit((parts.scheme, parts.netloc, path, parts.query, parts.fragment))


def callback_url(channel: str, app_host: str, resolve_address: AddressSource) -> str:
    """Build the callback URL the hub should post notifications to.

    A ``localhost`` host is replaced by the resolved local address, keeping
    the port, so the hub can reach a developer machine.
    """
    url = app_host + callback_route(channel)
    parts = urlsplit(url.strip())

    if parts.hostname == LOCALHOST:
        netloc = resolve_address()
        if parts.port is not None:
            netloc = f"{netloc}:{parts.port}"
        userinfo = parts.netloc.rpartition("@")
        if userinfo[1]:
            netloc = f"{userinfo[0]}@{netloc}"
        url = urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))

    return sanitize_url(url)


def webhook_name(
    prefix: str,
    environment: RuntimeEnvironment,
    resolve_address: AddressSource,
) -> str:
    """Return the environment-qualified webhook name.

    Staging and production share one webhook per prefix. Every other
    environment gets a per-developer name so that several machines can watch
    the same channel without stealing each other's webhook.
    """
    suffix = environment.name

    if not environment.is_shared:
        owner = environment.user or resolve_address().replace(".", "_")
        suffix = f"{owner}_{suffix}"

    return f"{prefix}_{suffix}"
