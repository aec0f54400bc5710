"""Common output schemas for API responses.

This module contains shared Pydantic models for common API responses
like the data envelope, error bodies and status information.
"""

from datetime import datetime
from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel

from application.rest.schemas.base import CamelModel

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    """Envelope wrapping every successful payload in ``{"data": ...}``.

    Example:
        >>> DataResponse[int](data=1).model_dump()
        {'data': 1}
    """

    data: T


class OperationResult(CamelModel):
    """Schema for the outcome of a multi-row operation.

    Attributes:
        success (bool): Always true on a 2xx response.
        updated_count (int, optional): Tasks changed by a bulk update.
        deleted_count (int, optional): Tasks removed.

    Example:
        >>> OperationResult(success=True, deleted_count=2)
    """

    success: bool = True
    updated_count: Optional[int] = None
    deleted_count: Optional[int] = None


class ErrorResponse(BaseModel):
    """Schema for error responses across all endpoints.

    Attributes:
        error (str): Short error category, e.g. "Not Found".
        message (str): Human readable description.
        details (Any, optional): Field level validation issues.

    Example:
        >>> error_response = ErrorResponse(
        ...     error="Not Found",
        ...     message="Task abc not found"
        ... )
    """

    error: str
    message: str
    details: Optional[Any] = None


class HealthResponse(BaseModel):
    """Schema for health check responses.

    Attributes:
        status (str): Service health status.
        timestamp (datetime): Server time of the check.
    """

    status: str
    timestamp: datetime


class ServiceInfoResponse(BaseModel):
    """Schema for the service banner served at the root path."""

    name: str
    version: str
    status: str
    endpoints: Dict[str, str]
