"""REST routes exposing registered providers, their models and health."""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from core.exceptions import ServiceError
from core.http.errors import describe_service_error
from core.pydantic_schemas import ApiResponse, error as api_error, ok as api_ok
from features.providers.dependencies import get_provider_catalog_service
from features.providers.schemas import (
    ProviderDetail,
    ProviderHealthSchema,
    ProviderModelSchema,
    ProviderSummary,
)
from features.providers.service import ProviderCatalogService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/providers", tags=["Providers"])


def _service_error_response(exc: ServiceError, message: str) -> JSONResponse:
    status_code, details = describe_service_error(exc)
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s: %s", message, exc)
    else:
        logger.info("%s: %s", message, exc)
    return JSONResponse(
        status_code=status_code,
        content=api_error(code=status_code, message=str(exc), data=details),
    )


@router.get(
    "",
    response_model=ApiResponse[List[ProviderSummary]],
    summary="List registered providers",
)
async def list_providers_endpoint(
    capability: Optional[str] = Query(None, description="Only providers supporting this capability"),
    service: ProviderCatalogService = Depends(get_provider_catalog_service),
) -> JSONResponse:
    try:
        providers = service.list_providers(capability)
    except ServiceError as exc:
        return _service_error_response(exc, "Failed to list providers")

    meta = {"count": len(providers)}
    if capability:
        meta["capability"] = capability
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=api_ok(
            "Providers retrieved",
            data=[provider.model_dump() for provider in providers],
            meta=meta,
        ),
    )


@router.get(
    "/{provider_id}",
    response_model=ApiResponse[ProviderDetail],
    summary="Describe a provider",
)
async def get_provider_endpoint(
    provider_id: str,
    service: ProviderCatalogService = Depends(get_provider_catalog_service),
) -> JSONResponse:
    try:
        detail = service.get_provider(provider_id)
    except ServiceError as exc:
        return _service_error_response(exc, f"Failed to describe provider {provider_id}")

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=api_ok("Provider retrieved", data=detail.model_dump()),
    )


@router.get(
    "/{provider_id}/models",
    response_model=ApiResponse[List[ProviderModelSchema]],
    summary="List models offered by a provider",
)
async def list_models_endpoint(
    provider_id: str,
    capability: Optional[str] = Query(None, description="Only models supporting this capability"),
    service: ProviderCatalogService = Depends(get_provider_catalog_service),
) -> JSONResponse:
    try:
        models = service.list_models(provider_id, capability)
    except ServiceError as exc:
        return _service_error_response(exc, f"Failed to list models for {provider_id}")

    meta = {"provider": provider_id, "count": len(models)}
    if capability:
        meta["capability"] = capability
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=api_ok("Models retrieved", data=[model.model_dump() for model in models], meta=meta),
    )


@router.get(
    "/{provider_id}/health",
    response_model=ApiResponse[ProviderHealthSchema],
    summary="Report provider and service health",
)
async def provider_health_endpoint(
    provider_id: str,
    service: ProviderCatalogService = Depends(get_provider_catalog_service),
) -> JSONResponse:
    try:
        health = await service.get_health(provider_id)
    except ServiceError as exc:
        return _service_error_response(exc, f"Failed to check health for {provider_id}")

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=api_ok("Provider health retrieved", data=health.model_dump()),
    )


__all__ = ["router"]
