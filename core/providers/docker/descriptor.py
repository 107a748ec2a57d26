"""Pydantic schema for ``MediaConduit.service.yml`` service descriptors."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _DescriptorModel(BaseModel):
    """Accept both the camelCase keys used in YAML files and snake_case names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class HealthCheckConfig(_DescriptorModel):
    """Health check settings for the service container."""

    url: str = Field(..., description="Health URL; may contain the __PORT__ placeholder")
    interval: Optional[str] = None
    timeout: Optional[str] = None
    retries: Optional[int] = None


class DockerConfig(_DescriptorModel):
    """Docker compose settings for the service."""

    compose_file: str = Field(..., description="Compose file path relative to the service directory")
    service_name: str = Field(..., description="Service name inside the compose file")
    image: Optional[str] = None
    ports: List[int] = Field(default_factory=list, description="Host ports; 0 requests a dynamic port")
    health_check: Optional[HealthCheckConfig] = None
    environment: Dict[str, str] = Field(default_factory=dict)
    volumes: List[str] = Field(default_factory=list)

    @field_validator("environment", mode="before")
    @classmethod
    def _stringify_environment(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {str(key): "" if item is None else str(item) for key, item in value.items()}
        return value


class ServiceRequirements(_DescriptorModel):
    """Host resources the service expects."""

    gpu: bool = False
    memory: Optional[str] = None
    cpu: Optional[str] = None


class ServiceDescriptor(_DescriptorModel):
    """Top-level schema for a service descriptor file."""

    name: str
    version: str
    description: Optional[str] = None
    docker: DockerConfig
    capabilities: List[str] = Field(default_factory=list)
    requirements: Optional[ServiceRequirements] = None

    @field_validator("version", mode="before")
    @classmethod
    def _stringify_version(cls, value: Any) -> Any:
        # YAML parses "1.0" as a float
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @classmethod
    def load(cls, path: str | Path) -> "ServiceDescriptor":
        """Load the descriptor from disk."""

        descriptor_path = Path(path)
        if not descriptor_path.exists():
            raise FileNotFoundError(f"Service descriptor not found: {descriptor_path}")

        with descriptor_path.open("r", encoding="utf-8") as fh:
            data: dict[str, Any] = yaml.safe_load(fh) or {}

        return cls.model_validate(data)


__all__ = [
    "DockerConfig",
    "HealthCheckConfig",
    "ServiceDescriptor",
    "ServiceRequirements",
]
