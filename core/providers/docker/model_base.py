"""Shared base for model wrappers that forward to a Docker-hosted service."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from core.exceptions import ValidationError
from core.providers.base import BaseMediaModel
from core.providers.capabilities import MediaCapability
from core.providers.docker.http_client import ServiceHTTPClient
from core.providers.docker.service import DockerService

logger = logging.getLogger(__name__)


class DockerMediaModel(BaseMediaModel):
    """Model wrapper holding the service handle and an HTTP client for it."""

    def __init__(
        self,
        *,
        model_id: str,
        name: str,
        provider: str,
        capabilities: Sequence[MediaCapability],
        client: ServiceHTTPClient,
        service: Optional[DockerService] = None,
    ) -> None:
        self.id = model_id
        self.name = name
        self.provider = provider
        self.capabilities = tuple(capabilities)
        self.client = client
        self.service = service

    def get_service(self) -> Optional[DockerService]:
        return self.service

    async def is_available(self) -> bool:
        if self.service is not None:
            return await self.service.is_service_healthy()
        return await self.client.check_health()

    @staticmethod
    def extract_text(input: Any) -> str:
        """Pull the text out of a string, a ``content``/``text`` holder or a list of either."""

        if isinstance(input, (list, tuple)):
            if not input:
                raise ValidationError("Input text cannot be empty", field="input")
            input = input[0]

        if isinstance(input, str):
            text = input
        else:
            text = getattr(input, "content", None) or getattr(input, "text", None) or ""
            if not isinstance(text, str):
                text = str(text)

        if not text.strip():
            raise ValidationError("Input text cannot be empty", field="input")
        return text

    @staticmethod
    def extract_bytes(input: Any, *, field: str = "input") -> bytes:
        """Return raw bytes from ``bytes``/``bytearray`` or an object exposing ``data``."""

        data = input if isinstance(input, (bytes, bytearray)) else getattr(input, "data", None)
        if not data:
            raise ValidationError("Input media cannot be empty", field=field)
        return bytes(data)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"{type(self).__name__}(id={self.id!r}, provider={self.provider!r})"


__all__ = ["DockerMediaModel"]
