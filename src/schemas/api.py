"""Response envelope shared by every endpoint."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class ApiResponse[T](BaseModel):
    """Successful responses carry `data`; failures carry `error` details."""

    success: bool = True
    data: T | None = None
    message: str = "Operation completed successfully"
    error: dict[str, Any] | None = None


class ErrorResponse(ApiResponse[None]):
    """Failure envelope built by the global exception handler."""

    success: bool = False
    message: str = "An error occurred"
