"""AI generation API endpoints.

- POST /api/ai/generate-color-scheme - Generate a color scheme for a brand

Responses use the {"success": bool, "data": ..., "message": ...} envelope.
A missing brand is rejected with 400 before any call to the model. Every
downstream failure (provider error, network error, strict-mode output
rejection) is logged and returned as a generic 500 without upstream detail.
"""

from fastapi import APIRouter, Body, Depends, Request, status
from fastapi.responses import JSONResponse

from brandshift.core.logging import get_logger
from brandshift.integrations.openai import OpenAIClient, get_openai
from brandshift.schemas.color_scheme import (
    GenerateColorSchemeRequest,
    GenerateColorSchemeResponse,
)
from brandshift.services.color_scheme import (
    ColorSchemeService,
    ColorSchemeValidationError,
)

logger = get_logger(__name__)

router = APIRouter()

GENERATION_FAILED_MESSAGE = "Failed to generate color scheme"


def _get_request_id(request: Request) -> str:
    """Get request_id from request state."""
    return getattr(request.state, "request_id", "unknown")


@router.post(
    "/generate-color-scheme",
    response_model=GenerateColorSchemeResponse,
    response_model_exclude_none=True,
    summary="Generate a color scheme",
    description="Generate a rebranding color scheme for a brand with optional style/mood preferences.",
    responses={
        400: {"description": "Brand missing from request"},
        500: {"description": "Generation failed"},
    },
)
async def generate_color_scheme(
    request: Request,
    data: GenerateColorSchemeRequest | None = Body(None),
    openai: OpenAIClient = Depends(get_openai),
) -> GenerateColorSchemeResponse | JSONResponse:
    """Generate a color scheme for the given brand."""
    request_id = _get_request_id(request)
    service = ColorSchemeService(openai)
    # An empty or null body is treated like a request without a brand
    if data is None:
        data = GenerateColorSchemeRequest()

    try:
        return await service.generate(data.brand, data.preferences)
    except ColorSchemeValidationError as e:
        logger.warning(
            "Color scheme request rejected",
            extra={
                "request_id": request_id,
                "field": e.field,
                "error_message": e.message,
            },
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "success": False,
                "message": e.message,
                "request_id": request_id,
            },
        )
    except Exception as e:
        logger.error(
            "Color scheme generation failed",
            extra={
                "request_id": request_id,
                "error_type": type(e).__name__,
                "error_message": str(e),
            },
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "message": GENERATION_FAILED_MESSAGE,
                "request_id": request_id,
            },
        )
