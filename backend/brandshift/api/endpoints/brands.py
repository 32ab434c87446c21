"""Brand catalog API endpoints.

Provides read-only access to the brand catalog:
- GET /api/brands - List brands, optionally filtered by category
- GET /api/brands/{brand_id} - Get a brand by ID

Error Logging Requirements:
- Log 4xx errors at WARNING, 5xx at ERROR
- Return structured error responses: {"error": str, "code": str, "request_id": str}
"""

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from brandshift.core.database import get_session
from brandshift.core.logging import get_logger
from brandshift.schemas.brand import BrandResponse
from brandshift.services.brand import BrandNotFoundError, BrandService

logger = get_logger(__name__)

router = APIRouter()


def _get_request_id(request: Request) -> str:
    """Get request_id from request state."""
    return getattr(request.state, "request_id", "unknown")


def _storage_error(request_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Failed to load brands",
            "code": "STORAGE_ERROR",
            "request_id": request_id,
        },
    )


@router.get(
    "",
    response_model=list[BrandResponse],
    summary="List brands",
    description="Retrieve all brands ordered by name, optionally filtered by category.",
)
async def list_brands(
    request: Request,
    category: str | None = Query(default=None, description="Category filter"),
    session: AsyncSession = Depends(get_session),
) -> list[BrandResponse] | JSONResponse:
    """List brands in the catalog."""
    request_id = _get_request_id(request)
    logger.debug(
        "List brands request",
        extra={"request_id": request_id, "category": category},
    )

    service = BrandService(session)
    try:
        brands = await service.list_brands(category=category)
    except SQLAlchemyError as e:
        logger.error(
            "Failed to list brands",
            extra={"request_id": request_id, "error_type": type(e).__name__},
            exc_info=True,
        )
        return _storage_error(request_id)

    return [BrandResponse.model_validate(b) for b in brands]


@router.get(
    "/{brand_id}",
    response_model=BrandResponse,
    summary="Get a brand",
    description="Retrieve a brand by its ID.",
    responses={
        404: {
            "description": "Brand not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": "Brand not found: <uuid>",
                        "code": "NOT_FOUND",
                        "request_id": "<request_id>",
                    }
                }
            },
        }
    },
)
async def get_brand(
    request: Request,
    brand_id: str,
    session: AsyncSession = Depends(get_session),
) -> BrandResponse | JSONResponse:
    """Get a brand by ID."""
    request_id = _get_request_id(request)
    logger.debug(
        "Get brand request",
        extra={"request_id": request_id, "brand_id": brand_id},
    )

    service = BrandService(session)
    try:
        brand = await service.get_brand(brand_id)
    except BrandNotFoundError as e:
        logger.warning(
            "Brand not found",
            extra={"request_id": request_id, "brand_id": e.brand_id},
        )
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={
                "error": str(e),
                "code": "NOT_FOUND",
                "request_id": request_id,
            },
        )
    except SQLAlchemyError as e:
        logger.error(
            "Failed to get brand",
            extra={
                "request_id": request_id,
                "brand_id": brand_id,
                "error_type": type(e).__name__,
            },
            exc_info=True,
        )
        return _storage_error(request_id)

    return BrandResponse.model_validate(brand)
