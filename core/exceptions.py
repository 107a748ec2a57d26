"""Custom Exception Hierarchy for the Media Provider Backend
This module defines a typed exception hierarchy that enables precise error
handling and structured error responses across providers, registries and the
HTTP layer.

Exception Handling Flow:
    1. Provider or registry raises a typed exception
    2. FastAPI route or exception handler catches it (see main.py)
    3. Handler converts it to a structured JSON envelope
    4. Diagnostic scripts print the message and traceback instead
"""

from __future__ import annotations


class ServiceError(Exception):
    """Base exception for all service layer errors."""


class ValidationError(ServiceError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str | None = None):
        self.message = message
        self.field = field
        super().__init__(self.message)


class NotFoundError(ServiceError):
    """Raised when a requested resource cannot be located."""

    def __init__(self, message: str, resource: str | None = None):
        self.message = message
        self.resource = resource
        super().__init__(self.message)


class ProviderError(ServiceError):
    """Raised when a provider or its backing service fails."""

    def __init__(self, message: str, provider: str | None = None, original_error: Exception | None = None):
        self.message = message
        self.provider = provider
        self.original_error = original_error
        super().__init__(self.message)


class ConfigurationError(ServiceError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, key: str | None = None):
        self.message = message
        self.key = key
        super().__init__(self.message)


class ModelNotFoundError(NotFoundError):
    """Raised by ``get_model`` when a provider does not know the model id."""

    def __init__(self, model_id: str, provider: str | None = None):
        super().__init__(f"Model {model_id} not found.", resource=model_id)
        self.model_id = model_id
        self.provider = provider


class ModelNotSupportedError(ValidationError):
    """Raised by ``create_model`` when a provider cannot build the model id."""

    def __init__(self, model_id: str, provider: str | None = None):
        provider_label = provider or "provider"
        super().__init__(f"Model {model_id} not supported by {provider_label}.", field="model")
        self.model_id = model_id
        self.provider = provider


class ProviderNotFoundError(NotFoundError):
    """Raised when a provider id is not registered."""

    def __init__(self, provider_id: str):
        super().__init__(f"Provider '{provider_id}' not found in registry", resource=provider_id)
        self.provider_id = provider_id


class ProviderCreationError(ProviderError):
    """Raised when a registered provider cannot be instantiated."""

    def __init__(self, provider_id: str, reason: str, original_error: Exception | None = None):
        super().__init__(
            f"Failed to create provider '{provider_id}': {reason}",
            provider=provider_id,
            original_error=original_error,
        )
        self.provider_id = provider_id
        self.reason = reason


class ServiceNotFoundError(NotFoundError):
    """Raised when a service identifier cannot be resolved."""

    def __init__(self, identifier: str):
        super().__init__(f"Service '{identifier}' not found in registry", resource=identifier)
        self.identifier = identifier


class ServiceCreationError(ServiceError):
    """Raised when a service handle cannot be built from its descriptor."""

    def __init__(self, identifier: str, reason: str):
        self.message = f"Failed to create service '{identifier}': {reason}"
        self.identifier = identifier
        self.reason = reason
        super().__init__(self.message)
