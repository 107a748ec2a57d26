"""Response envelope shared by every JSON endpoint."""

from __future__ import annotations

from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """``{code, success, message, data, meta}`` envelope."""

    code: int = Field(..., description="HTTP status code of the response")
    success: bool = Field(..., description="True for codes below 400")
    message: str = Field(..., description="Human readable summary")
    data: Optional[T] = Field(None, description="Endpoint payload")
    meta: Optional[Dict[str, Any]] = Field(default=None, description="Counts, filters and other metadata")


def api_response(
    *,
    code: int = 200,
    message: str,
    data: Any | None = None,
    meta: Dict[str, Any] | None = None,
) -> Dict[str, Any]:
    envelope = ApiResponse[Any](code=code, success=code < 400, message=message, data=data, meta=meta)
    return envelope.model_dump()


def ok(message: str, data: Any | None = None, meta: Dict[str, Any] | None = None) -> Dict[str, Any]:
    return api_response(code=200, message=message, data=data, meta=meta)


def error(code: int, message: str, data: Any | None = None, meta: Dict[str, Any] | None = None) -> Dict[str, Any]:
    if code < 400:
        raise ValueError("Error responses must use an error HTTP status code (>= 400)")
    return api_response(code=code, message=message, data=data, meta=meta)


__all__ = ["ApiResponse", "api_response", "error", "ok"]
