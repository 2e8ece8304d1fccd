from __future__ import annotations

import httpx

from toorker.config.settings import DEFAULT_IP_LOOKUP_TIMEOUT, DEFAULT_IP_LOOKUP_URL, Settings
from toorker.utils import ProviderError, get_logger


logger = get_logger(__name__)


class IpLookupError(ProviderError):
    pass


class HttpIpLookup:
    """Resolve the public IP address through a JSON echo endpoint."""

    def __init__(
        self,
        url: str = DEFAULT_IP_LOOKUP_URL,
        *,
        timeout: float = DEFAULT_IP_LOOKUP_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "HttpIpLookup":
        return cls(settings.ip_lookup_url, timeout=settings.ip_lookup_timeout)

    async def fetch_public_ip(self) -> str:
        try:
            if self._client is not None:
                response = await self._client.get(self._url, timeout=self._timeout)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.get(self._url)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            raise IpLookupError(f"Public IP lookup failed: {exc}") from exc

        address = payload.get("ip") if isinstance(payload, dict) else None
        if not isinstance(address, str) or not address:
            raise IpLookupError("Public IP lookup response did not include an address")
        logger.debug("Public IP resolved", url=self._url)
        return address


__all__ = ["HttpIpLookup", "IpLookupError"]
