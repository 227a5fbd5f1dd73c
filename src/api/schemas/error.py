"""
Error schemas - Pydantic models for the API error envelope
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorDetail(BaseModel):
    """Detailed error information"""
    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(
        None,
        description="Additional context (identifier, valid values, etc.)"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the error occurred"
    )


class ErrorResponse(BaseModel):
    """API error response - every error uses this structure"""
    error: ErrorDetail = Field(description="Error information")
    request_id: Optional[str] = Field(None, description="Request ID for logging/debugging")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "error": {
                "code": "OVERLAY_KIND_NOT_FOUND",
                "message": "Overlay kind 'banner' not found",
                "details": {"kind": "banner", "valid_kinds": ["text", "cta", "socials", "border", "counter"]},
                "timestamp": "2026-01-12T10:30:00Z"
            },
            "request_id": "req-12345"
        }
    })


class ValidationErrorResponse(BaseModel):
    """Validation error - when request parameters are invalid"""
    error: ErrorDetail = Field(description="Error information")
    validation_errors: List[Dict[str, Any]] = Field(description="Per-field validation errors")
    request_id: Optional[str] = Field(None, description="Request ID for logging/debugging")
