"""
Common response schemas shared by packing list payloads.
"""
from pydantic import BaseModel, ConfigDict, Field


class ErrorResponseSchema(BaseModel):
    """Standard error response format."""
    model_config = ConfigDict(from_attributes=True)

    error: str = Field(..., description="Error message", json_schema_extra={"example": "Size L is not available in the packing list (available: S, M)"})
    error_code: str = Field(..., description="Machine-readable error kind", json_schema_extra={"example": "SIZE_NOT_AVAILABLE"})
    field: str | None = Field(None, description="Dotted path of the offending field", json_schema_extra={"example": "cartons.0.items.0.sizes.0.size_name"})
