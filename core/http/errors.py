"""Structured HTTP error payloads and status mapping for service exceptions."""

from __future__ import annotations

from typing import Any, Dict, Tuple

from fastapi import status

from core.exceptions import (
    ConfigurationError,
    NotFoundError,
    ProviderError,
    ServiceCreationError,
    ServiceError,
    ValidationError,
)


def _build_error_payload(
    *,
    error: str,
    message: str,
    context: Dict[str, Any] | None = None,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"error": error, "message": message}
    if context:
        payload["context"] = context
    return payload


def format_validation_error(exc: ValidationError) -> Dict[str, Any]:
    context = {"field": exc.field} if getattr(exc, "field", None) else None
    return _build_error_payload(error="validation_error", message=str(exc), context=context)


def format_not_found_error(exc: NotFoundError) -> Dict[str, Any]:
    context = {"resource": exc.resource} if getattr(exc, "resource", None) else None
    return _build_error_payload(error="not_found", message=str(exc), context=context)


def format_configuration_error(exc: ConfigurationError) -> Dict[str, Any]:
    context = {"key": exc.key} if getattr(exc, "key", None) else None
    return _build_error_payload(error="configuration_error", message=str(exc), context=context)


def format_provider_error(exc: ProviderError) -> Dict[str, Any]:
    """Payload for provider failures; includes the provider id and root cause when known."""

    context = {
        key: value
        for key, value in {
            "provider": exc.provider,
            "original_error": str(exc.original_error) if exc.original_error else None,
        }.items()
        if value
    }
    return _build_error_payload(error="provider_error", message=str(exc), context=context or None)


def format_service_error(exc: ServiceError) -> Dict[str, Any]:
    context = None
    if isinstance(exc, ServiceCreationError):
        context = {"identifier": exc.identifier}
    return _build_error_payload(error="service_error", message=str(exc), context=context)


def describe_service_error(exc: ServiceError) -> Tuple[int, Dict[str, Any]]:
    """Return the HTTP status and payload for any :class:`ServiceError`."""

    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND, format_not_found_error(exc)
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST, format_validation_error(exc)
    if isinstance(exc, ConfigurationError):
        return status.HTTP_500_INTERNAL_SERVER_ERROR, format_configuration_error(exc)
    if isinstance(exc, ProviderError):
        return status.HTTP_502_BAD_GATEWAY, format_provider_error(exc)
    return status.HTTP_502_BAD_GATEWAY, format_service_error(exc)


__all__ = [
    "describe_service_error",
    "format_configuration_error",
    "format_not_found_error",
    "format_provider_error",
    "format_service_error",
    "format_validation_error",
]
