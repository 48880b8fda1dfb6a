"""
hueharvest v1 API Routes
Palette and dominant color extraction over uploaded files or image URLs.
"""
import time
from typing import Optional, Union

from fastapi import APIRouter, File, HTTPException, Query, UploadFile

from hueharvest.config import config
from hueharvest.schemas import ColorResponse, ErrorResponse, MetricsResponse, PaletteResponse
from hueharvest.services.colors.extract_api import get_color_async, get_palette_async
from hueharvest.services.colors.validation import (
    ConfigurationError, validate_color_type, validate_options, validate_quality
)
from hueharvest.utils.ids import generate_request_id
from hueharvest.utils.logging import get_logger
from hueharvest.utils.metrics import get_metrics

router = APIRouter(prefix="/v1", tags=["Palette extraction"])

ERROR_RESPONSES = {400: {"model": ErrorResponse, "description": "Invalid parameters or request"}}


async def _resolve_source(file: Optional[UploadFile], url: Optional[str]) -> Union[bytes, str]:
    """Pick the image source from the request; exactly one of file / url."""
    if file is None and url is None:
        raise HTTPException(status_code=400, detail="Either 'file' or 'url' must be provided")

    if file is not None and url is not None:
        raise HTTPException(status_code=400, detail="Cannot specify both 'file' and 'url'")

    if file is not None:
        try:
            return await file.read()
        except Exception as e:
            raise HTTPException(status_code=400, detail=f"Failed to read file: {str(e)}")

    # Only remote and inline sources; never server-side paths
    if not (url.startswith("data:") or url.lower().startswith(config.SUPPORTED_URL_SCHEMES)):
        raise HTTPException(
            status_code=400,
            detail="url must be an http(s) URL or a data URL"
        )
    return url


@router.post("/palette", response_model=PaletteResponse, responses=ERROR_RESPONSES)
async def extract_palette(
    file: Optional[UploadFile] = File(None, description="Image file"),
    url: Optional[str] = Query(None, description="http(s) or data URL of the image"),
    color_count: int = Query(config.DEFAULT_COLOR_COUNT, description="Maximum palette size (2-256)"),
    quality: Optional[int] = Query(None, description="Sampling stride, 1 = every pixel"),
    color_type: str = Query("hex", description="Output format: 'hex' or 'array'"),
) -> PaletteResponse:
    """
    Extract a median-cut palette.

    Images that cannot be fetched or decoded produce an empty palette;
    invalid parameters produce a 400.
    """
    request_id = generate_request_id("pal")
    start_time = time.time()

    try:
        options = validate_options(color_count, quality)
        output_type = validate_color_type(color_type)
    except ConfigurationError as e:
        get_metrics().increment_failure_count("configuration")
        raise HTTPException(status_code=400, detail=str(e))

    source = await _resolve_source(file, url)
    palette = await get_palette_async(
        source, options.color_count, options.quality, output_type
    )

    get_logger().info(
        "Palette request complete",
        extra={
            "request_id": request_id,
            "palette_size": len(palette),
            "ms_total": (time.time() - start_time) * 1000,
        }
    )

    return PaletteResponse(
        request_id=request_id,
        palette=palette,
        color_count=options.color_count,
        quality=options.quality,
        color_type=output_type.value,
    )


@router.post("/color", response_model=ColorResponse, responses=ERROR_RESPONSES)
async def extract_color(
    file: Optional[UploadFile] = File(None, description="Image file"),
    url: Optional[str] = Query(None, description="http(s) or data URL of the image"),
    quality: Optional[int] = Query(None, description="Sampling stride, 1 = every pixel"),
    color_type: str = Query("hex", description="Output format: 'hex' or 'array'"),
) -> ColorResponse:
    """Extract the dominant color; null when the image cannot be read."""
    request_id = generate_request_id("col")

    try:
        quality = validate_quality(quality)
        output_type = validate_color_type(color_type)
    except ConfigurationError as e:
        get_metrics().increment_failure_count("configuration")
        raise HTTPException(status_code=400, detail=str(e))

    source = await _resolve_source(file, url)
    color = await get_color_async(source, quality, output_type)

    get_logger().info(
        "Color request complete",
        extra={"request_id": request_id, "found": color is not None}
    )

    return ColorResponse(
        request_id=request_id,
        color=color,
        quality=quality,
        color_type=output_type.value,
    )


@router.get("/metrics", response_model=MetricsResponse)
def extraction_metrics() -> MetricsResponse:
    """In-process extraction counters and stage timings."""
    return MetricsResponse(**get_metrics().get_summary())
