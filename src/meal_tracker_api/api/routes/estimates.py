"""Estimation API routes: calorie checks and photo analysis that store nothing."""

import base64
import logging

from fastapi import APIRouter, File, UploadFile

from meal_tracker_api.api.dependencies import EstimationServiceDep, UserIdDep
from meal_tracker_api.core.exceptions import ValidationError
from meal_tracker_api.models.estimation import (
    AnalyzeMealImageOutput,
    EstimationResult,
    LogMealOutput,
)
from meal_tracker_api.models.meal import ImageAnalysisRequest, QuickCheckRequest

router = APIRouter()
logger = logging.getLogger(__name__)

MAX_IMAGE_SIZE = 10 * 1024 * 1024  # 10 MB
ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/png", "image/webp", "image/heic", "image/heif"}


def to_data_url(content: bytes, content_type: str) -> str:
    """Encode raw image bytes as a ``data:`` URL."""
    encoded = base64.b64encode(content).decode("utf-8")
    return f"data:{content_type};base64,{encoded}"


@router.post("/quick-check", response_model=EstimationResult[LogMealOutput])
async def quick_check(
    request: QuickCheckRequest,
    _user_id: UserIdDep,
    estimator: EstimationServiceDep,
):
    """
    Estimate calories and macros for a description without logging it.

    - **description**: What you are about to eat
    """
    return await estimator.quick_check(request.description)


@router.post("/analyze-image", response_model=EstimationResult[AnalyzeMealImageOutput])
async def analyze_image(
    request: ImageAnalysisRequest,
    _user_id: UserIdDep,
    estimator: EstimationServiceDep,
):
    """
    Identify food items in a photo given as an http(s) or data URL.

    The items are returned for review; log them with ``POST /meals/photo``.
    """
    return await estimator.analyze_meal_image(request.image_url)


@router.post("/analyze-image/upload", response_model=EstimationResult[AnalyzeMealImageOutput])
async def analyze_image_upload(
    _user_id: UserIdDep,
    estimator: EstimationServiceDep,
    image: UploadFile = File(..., description="Meal photo (JPEG, PNG, WebP or HEIC)"),
):
    """Identify food items in an uploaded photo."""
    content_type = image.content_type or ""
    if content_type not in ALLOWED_IMAGE_TYPES:
        raise ValidationError(
            f"Unsupported image type '{content_type}'",
            details={"allowed": sorted(ALLOWED_IMAGE_TYPES)},
        )

    content = await image.read()
    if not content:
        raise ValidationError("Uploaded image is empty")
    if len(content) > MAX_IMAGE_SIZE:
        raise ValidationError(
            f"Image exceeds maximum size of {MAX_IMAGE_SIZE // (1024 * 1024)} MB",
            details={"size": len(content), "max_size": MAX_IMAGE_SIZE},
        )

    logger.debug(f"Analyzing uploaded image {image.filename} ({len(content)} bytes)")
    return await estimator.analyze_meal_image(to_data_url(content, content_type))
