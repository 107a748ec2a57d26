"""Thin httpx wrapper used by model wrappers to call their service container."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from config.docker import DEFAULT_REQUEST_TIMEOUT_SECONDS
from core.exceptions import ProviderError

logger = logging.getLogger(__name__)


class ServiceHTTPClient:
    """Issue requests against a service base URL and raise ``ProviderError`` on failure."""

    def __init__(
        self,
        base_url: str,
        *,
        provider: str,
        timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.provider = provider
        self.timeout = timeout
        self._transport = transport

    async def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        url = f"{self.base_url}/{path.lstrip('/')}"
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.request(method, url, **kwargs)
            except httpx.HTTPError as exc:
                logger.error("%s request to %s failed: %s", self.provider, url, exc)
                raise ProviderError(
                    f"{self.provider} request to {path} failed: {exc}",
                    provider=self.provider,
                    original_error=exc,
                ) from exc

        if response.status_code >= 400:
            logger.error("%s API error %s: %s", self.provider, response.status_code, response.text[:500])
            raise ProviderError(
                f"{self.provider} API error {response.status_code}",
                provider=self.provider,
            )
        return response

    async def get_json(self, path: str, **kwargs: Any) -> Any:
        response = await self.request("GET", path, **kwargs)
        return self.decode_json(response, path)

    async def post_json(self, path: str, payload: Any, **kwargs: Any) -> Any:
        response = await self.request("POST", path, json=payload, **kwargs)
        return self.decode_json(response, path)

    async def post_for_bytes(self, path: str, **kwargs: Any) -> httpx.Response:
        """POST and return the raw response for binary payloads."""

        response = await self.request("POST", path, **kwargs)
        if not response.content:
            raise ProviderError(f"{self.provider} returned an empty response from {path}", provider=self.provider)
        return response

    async def check_health(self, path: str = "/health") -> bool:
        try:
            await self.request("GET", path)
        except ProviderError:
            return False
        return True

    def decode_json(self, response: httpx.Response, path: str) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise ProviderError(
                f"{self.provider} returned invalid JSON from {path}",
                provider=self.provider,
                original_error=exc,
            ) from exc


__all__ = ["ServiceHTTPClient"]
