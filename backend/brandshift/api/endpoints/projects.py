"""Rebranding project API endpoints.

Provides CRUD operations for projects:
- GET /api/projects - List projects with pagination
- POST /api/projects - Create a project for a brand
- GET /api/projects/{project_id} - Get a project by ID
- PUT /api/projects/{project_id} - Update a project (including its color scheme)
- DELETE /api/projects/{project_id} - Delete a project

Error Logging Requirements:
- Log 4xx errors at WARNING, 5xx at ERROR
- Return structured error responses: {"error": str, "code": str, "request_id": str}
"""

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from brandshift.core.database import get_session
from brandshift.core.logging import get_logger
from brandshift.schemas.project import (
    ProjectCreate,
    ProjectListResponse,
    ProjectResponse,
    ProjectUpdate,
)
from brandshift.services.project import (
    ProjectNotFoundError,
    ProjectService,
    ProjectValidationError,
)

logger = get_logger(__name__)

router = APIRouter()

NOT_FOUND_RESPONSE = {
    404: {
        "description": "Project not found",
        "content": {
            "application/json": {
                "example": {
                    "error": "Project not found: <uuid>",
                    "code": "NOT_FOUND",
                    "request_id": "<request_id>",
                }
            }
        },
    }
}


def _get_request_id(request: Request) -> str:
    """Get request_id from request state."""
    return getattr(request.state, "request_id", "unknown")


def _not_found(e: ProjectNotFoundError, request_id: str) -> JSONResponse:
    logger.warning(
        "Project not found",
        extra={"request_id": request_id, "project_id": e.project_id},
    )
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": str(e),
            "code": "NOT_FOUND",
            "request_id": request_id,
        },
    )


def _invalid(e: ProjectValidationError, request_id: str) -> JSONResponse:
    logger.warning(
        "Project validation error",
        extra={
            "request_id": request_id,
            "field": e.field,
            "value": e.value,
            "error_message": e.message,
        },
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": str(e),
            "code": "VALIDATION_ERROR",
            "request_id": request_id,
        },
    )


@router.get(
    "",
    response_model=ProjectListResponse,
    summary="List projects",
    description="Retrieve a paginated list of projects, most recently updated first.",
)
async def list_projects(
    request: Request,
    limit: int = Query(default=100, ge=1, le=1000, description="Number of results"),
    offset: int = Query(default=0, ge=0, description="Number of results to skip"),
    user_id: str | None = Query(default=None, description="Only this user's projects"),
    session: AsyncSession = Depends(get_session),
) -> ProjectListResponse:
    """List projects with pagination."""
    request_id = _get_request_id(request)
    logger.debug(
        "List projects request",
        extra={"request_id": request_id, "limit": limit, "offset": offset},
    )

    service = ProjectService(session)
    projects, total = await service.list_projects(
        limit=limit, offset=offset, user_id=user_id
    )

    return ProjectListResponse(
        items=[ProjectResponse.model_validate(p) for p in projects],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.post(
    "",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a project",
    description="Start a rebranding project for an existing brand.",
)
async def create_project(
    request: Request,
    data: ProjectCreate,
    session: AsyncSession = Depends(get_session),
) -> ProjectResponse | JSONResponse:
    """Create a new project."""
    request_id = _get_request_id(request)
    logger.debug(
        "Create project request",
        extra={
            "request_id": request_id,
            "project_name": data.name,
            "brand_id": data.brand_id,
        },
    )

    service = ProjectService(session)
    try:
        project = await service.create_project(data)
    except ProjectValidationError as e:
        return _invalid(e, request_id)
    return ProjectResponse.model_validate(project)


@router.get(
    "/{project_id}",
    response_model=ProjectResponse,
    summary="Get a project",
    description="Retrieve a project by its ID.",
    responses=NOT_FOUND_RESPONSE,
)
async def get_project(
    request: Request,
    project_id: str,
    session: AsyncSession = Depends(get_session),
) -> ProjectResponse | JSONResponse:
    """Get a project by ID."""
    request_id = _get_request_id(request)
    service = ProjectService(session)
    try:
        project = await service.get_project(project_id)
    except ProjectNotFoundError as e:
        return _not_found(e, request_id)
    return ProjectResponse.model_validate(project)


@router.put(
    "/{project_id}",
    response_model=ProjectResponse,
    summary="Update a project",
    description="Update name, status, preferences or saved color scheme of a project.",
    responses=NOT_FOUND_RESPONSE,
)
async def update_project(
    request: Request,
    project_id: str,
    data: ProjectUpdate,
    session: AsyncSession = Depends(get_session),
) -> ProjectResponse | JSONResponse:
    """Update an existing project."""
    request_id = _get_request_id(request)
    logger.debug(
        "Update project request",
        extra={
            "request_id": request_id,
            "project_id": project_id,
            "update_fields": sorted(data.model_dump(exclude_unset=True).keys()),
        },
    )

    service = ProjectService(session)
    try:
        project = await service.update_project(project_id, data)
    except ProjectNotFoundError as e:
        return _not_found(e, request_id)
    return ProjectResponse.model_validate(project)


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
    summary="Delete a project",
    description="Delete an existing project by its ID.",
    responses=NOT_FOUND_RESPONSE,
)
async def delete_project(
    request: Request,
    project_id: str,
    session: AsyncSession = Depends(get_session),
) -> None | JSONResponse:
    """Delete a project."""
    request_id = _get_request_id(request)
    service = ProjectService(session)
    try:
        await service.delete_project(project_id)
    except ProjectNotFoundError as e:
        return _not_found(e, request_id)
    return None
