"""Hub HTTP client adapter.

Implements HubPort against the hub's REST API using httpx:

- GET    /webhook/{name}   retrieve a webhook
- PUT    /webhook/{name}   create a webhook
- DELETE /webhook/{name}   delete a webhook
- GET    {item uri}        fetch a channel item

Every failure is translated into HubError (HubNotFoundError for 404) so the
core never sees httpx exceptions.
"""

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from hubwatch.core.errors import HubError, HubNotFoundError
from hubwatch.core.models import HubItem, WebhookDescriptor
from hubwatch.core.ports import HubPort

logger = logging.getLogger(__name__)


def _raise_for_status(response: httpx.Response, action: str) -> None:
    if response.status_code == 404:
        raise HubNotFoundError(f"Hub {action} failed: {response.request.url} not found")
    if response.is_error:
        raise HubError(
            f"Hub {action} failed with status {response.status_code}",
            status_code=response.status_code,
        )


class HttpxHubClient(HubPort):
    """httpx-backed hub client."""

    def __init__(
        self,
        api_url: str,
        timeout: float = 30.0,
        headers: Mapping[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        **client_kwargs: Any,
    ):
        """Initialize the hub client.

        Args:
            api_url: Base URL of the hub (e.g., http://hub.iad.dev.example.io).
            timeout: Request timeout in seconds.
            headers: Extra headers sent with every request.
            transport: Optional httpx transport (used by tests).
            **client_kwargs: Passed through to httpx.AsyncClient.
        """
        self.api_url = api_url.rstrip("/")
        self.client = httpx.AsyncClient(
            base_url=self.api_url,
            timeout=timeout,
            headers=dict(headers or {}),
            transport=transport,
            **client_kwargs,
        )

    @classmethod
    def from_options(cls, api_url: str, options: Mapping[str, Any]) -> "HttpxHubClient":
        """Build a client from the watcher's pass-through client options."""
        return cls(api_url, **dict(options))

    async def __aenter__(self) -> "HttpxHubClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.client.aclose()

    async def close(self) -> None:
        """Close the httpx client and clean up resources."""
        await self.client.aclose()

    async def _request(self, method: str, url: str, action: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise HubError(f"Hub {action} failed: {e}") from e
        _raise_for_status(response, action)
        return response

    async def get_webhook(self, name: str) -> WebhookDescriptor:
        response = await self._request("GET", f"/webhook/{name}", "webhook lookup")
        try:
            data = response.json()
        except ValueError as e:
            raise HubError(
                f"Hub returned invalid webhook JSON for {name}",
                status_code=response.status_code,
            ) from e
        return WebhookDescriptor.from_hub_json(data)

    async def create_webhook(self, descriptor: WebhookDescriptor) -> None:
        await self._request(
            "PUT",
            f"/webhook/{descriptor.name}",
            "webhook create",
            json=descriptor.to_hub_json(self.api_url),
        )
        logger.debug(
            f"Created webhook {descriptor.name}",
            extra={"callback_url": descriptor.callback_url},
        )

    async def delete_webhook(self, name: str) -> None:
        await self._request("DELETE", f"/webhook/{name}", "webhook delete")

    async def get_item(self, uri: str) -> HubItem:
        response = await self._request("GET", uri, "item fetch")
        content_type = response.headers.get("Content-Type", "")

        if "json" in content_type:
            try:
                content: Any = response.json()
            except ValueError as e:
                raise HubError(
                    f"Hub returned invalid JSON for {uri}",
                    status_code=response.status_code,
                ) from e
        else:
            content = response.text

        return HubItem(uri=uri, content=content, content_type=content_type)
