"""Common system-level response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Acknowledgement payload carrying a human-readable message."""

    message: str = Field(description="Human readable acknowledgement")


class ErrorResponse(BaseModel):
    """Payload returned for every failed request."""

    code: str = Field(description="Machine readable error identifier")
    message: str = Field(description="Human readable error description")
    details: Any | None = Field(default=None, description="Additional diagnostic context")


__all__ = ["ErrorResponse", "MessageResponse"]
