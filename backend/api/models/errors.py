"""
Error response models.

Every non-2xx response from api/errors.py uses one of these shapes.
"""

from pydantic import BaseModel
from typing import Optional


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str
    detail: Optional[str] = None
    code: Optional[str] = None


class ValidationErrorResponse(BaseModel):
    """Request body failed schema validation (missing or mistyped fields)."""

    error: str = "Validation Error"
    detail: list[dict]
