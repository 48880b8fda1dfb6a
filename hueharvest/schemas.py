"""
hueharvest API Schemas
Pydantic models for palette and dominant color responses.
"""
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

ColorField = Union[str, List[int]]


class HealthResponse(BaseModel):
    """Health check response."""
    ok: bool = Field(True, description="Service health status")
    version: str = Field(..., description="Service version")
    service: str = Field("hueharvest", description="Service name")


class ErrorResponse(BaseModel):
    """Error response."""
    detail: str = Field(..., description="Error message")


class PaletteResponse(BaseModel):
    """Median-cut palette for one image."""
    request_id: str = Field(..., description="Request identifier for log correlation")
    palette: List[ColorField] = Field(
        default_factory=list,
        description="Colors as '#rrggbb' strings or [r, g, b] arrays; empty if the image could not be read"
    )
    color_count: int = Field(..., ge=2, description="Requested maximum palette size")
    quality: int = Field(..., ge=1, description="Sampling stride used")
    color_type: str = Field(..., description="Output format ('hex' or 'array')")


class ColorResponse(BaseModel):
    """Dominant color for one image."""
    request_id: str = Field(..., description="Request identifier for log correlation")
    color: Optional[ColorField] = Field(
        None,
        description="Dominant color, null if the image could not be read or is fully transparent"
    )
    quality: int = Field(..., ge=1, description="Sampling stride used")
    color_type: str = Field(..., description="Output format ('hex' or 'array')")


class MetricsResponse(BaseModel):
    """In-process metrics summary."""
    uptime_seconds: float
    counters: Dict[str, int]
    timing_stats: Dict[str, Dict[str, float]]
    sample_count_stats: Dict[str, Any]
