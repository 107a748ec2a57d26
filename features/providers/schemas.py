"""Response payloads for the providers feature."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from core.providers.types import ProviderHealth, ProviderModel


class ProviderModelSchema(BaseModel):
    id: str
    name: str
    capabilities: List[str]
    description: Optional[str] = None
    parameters: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_descriptor(cls, descriptor: ProviderModel) -> "ProviderModelSchema":
        return cls.model_validate(descriptor.to_dict())


class ProviderSummary(BaseModel):
    """Provider metadata returned by the listing endpoint."""

    id: str
    name: str
    type: str
    capabilities: List[str]
    models: List[str]
    service_url: Optional[str] = Field(default=None, description="Service identifier the provider resolves")
    base_url: Optional[str] = Field(default=None, description="HTTP base URL of the backing service")
    initialized: bool = False


class ProviderDetail(ProviderSummary):
    model_descriptors: List[ProviderModelSchema] = Field(default_factory=list)


class ServiceStatusSchema(BaseModel):
    running: bool
    healthy: bool
    error: Optional[str] = None


class ProviderHealthSchema(BaseModel):
    provider: str
    status: str
    uptime_seconds: float
    active_jobs: int = 0
    queued_jobs: int = 0
    last_error: Optional[str] = None
    service: ServiceStatusSchema

    @classmethod
    def build(cls, provider_id: str, health: ProviderHealth, service: Dict[str, Any]) -> "ProviderHealthSchema":
        return cls(
            provider=provider_id,
            status=health.status,
            uptime_seconds=round(health.uptime_seconds, 3),
            active_jobs=health.active_jobs,
            queued_jobs=health.queued_jobs,
            last_error=health.last_error,
            service=ServiceStatusSchema(**service),
        )


__all__ = [
    "ProviderDetail",
    "ProviderHealthSchema",
    "ProviderModelSchema",
    "ProviderSummary",
    "ServiceStatusSchema",
]
