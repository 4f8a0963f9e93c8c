"""Pydantic response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for response serialization
and automatic OpenAPI documentation. The conversion endpoint itself
returns the converted document as-is, so only the listing, health and
error bodies need models.

HOW: One model per JSON response body. All fields carry
Field(description=...) so they show up in the /docs UI.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- FormatInfo.key matches the codec registry identifiers exactly
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class FormatInfo(BaseModel):
    """Description of a supported format.

    WHY: Clients query /formats to discover which formats can be used for
    input_format and output_format, and whether a document of that format
    is text or binary.
    """

    key: str = Field(description="Format identifier used in API requests.")
    encoding: str = Field(description="'binary' for spreadsheet formats, 'utf8' otherwise.")
    media_type: str = Field(description="MIME type of documents served in this format.")

    model_config = {"json_schema_extra": {
        "examples": [
            {"key": "yaml", "encoding": "utf8", "media_type": "application/yaml"},
        ]
    }}


class ErrorResponse(BaseModel):
    """Standard error response body.

    RULES:
    - detail is always a human-readable error message
    """

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
