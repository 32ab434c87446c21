"""Project service with CRUD operations.

Provides business logic for rebranding Project entities, separating concerns
from API routes. Uses async SQLAlchemy 2.0 patterns.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from brandshift.core.logging import get_logger
from brandshift.models.project import Project
from brandshift.repositories.brand import BrandRepository
from brandshift.repositories.project import ProjectRepository
from brandshift.schemas.project import ProjectCreate, ProjectUpdate
from brandshift.services.brand import is_valid_id

logger = get_logger(__name__)


class ProjectServiceError(Exception):
    """Base exception for ProjectService errors."""

    pass


class ProjectNotFoundError(ProjectServiceError):
    """Raised when a project does not exist."""

    def __init__(self, project_id: str):
        self.project_id = project_id
        super().__init__(f"Project not found: {project_id}")


class ProjectValidationError(ProjectServiceError):
    """Raised when a project references missing data or is otherwise invalid."""

    def __init__(self, field: str, value: Any, message: str):
        self.field = field
        self.value = value
        self.message = message
        super().__init__(f"Validation failed for '{field}': {message}")


class ProjectService:
    """Service class for Project CRUD operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.repository = ProjectRepository(session)
        self.brands = BrandRepository(session)

    async def list_projects(
        self,
        limit: int = 100,
        offset: int = 0,
        user_id: str | None = None,
    ) -> tuple[list[Project], int]:
        """List projects with the total count for pagination."""
        if user_id is not None and not is_valid_id(user_id):
            return [], 0
        projects = await self.repository.list_all(
            limit=limit, offset=offset, user_id=user_id
        )
        total = await self.repository.count(user_id=user_id)
        return projects, total

    async def get_project(self, project_id: str) -> Project:
        """Get a project by ID.

        Raises:
            ProjectNotFoundError: If no project has this ID
        """
        if not is_valid_id(project_id):
            raise ProjectNotFoundError(project_id)
        project = await self.repository.get_by_id(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    async def create_project(self, data: ProjectCreate) -> Project:
        """Create a project for an existing brand (and user, when given).

        Raises:
            ProjectValidationError: If the brand or user does not exist
        """
        if not is_valid_id(data.brand_id) or (
            await self.brands.get_by_id(data.brand_id) is None
        ):
            raise ProjectValidationError(
                "brand_id", data.brand_id, "Brand does not exist"
            )
        if data.user_id is not None and (
            not is_valid_id(data.user_id)
            or not await self.repository.user_exists(data.user_id)
        ):
            raise ProjectValidationError("user_id", data.user_id, "User does not exist")

        project = await self.repository.create(
            name=data.name,
            brand_id=data.brand_id,
            user_id=data.user_id,
            status=data.status,
            preferences=data.preferences.model_dump(exclude_none=True),
        )
        logger.info(
            "Project created",
            extra={"project_id": project.id, "brand_id": data.brand_id},
        )
        return project

    async def update_project(self, project_id: str, data: ProjectUpdate) -> Project:
        """Update only the fields present in the request.

        Raises:
            ProjectNotFoundError: If no project has this ID
        """
        project = await self.get_project(project_id)

        values: dict[str, Any] = data.model_dump(exclude_unset=True)
        if "preferences" in values and data.preferences is not None:
            values["preferences"] = data.preferences.model_dump(exclude_none=True)
        # Columns are NOT NULL; an explicit null leaves the value unchanged
        values = {field: value for field, value in values.items() if value is not None}

        if not values:
            return project
        return await self.repository.update(project, values)

    async def delete_project(self, project_id: str) -> None:
        """Delete a project.

        Raises:
            ProjectNotFoundError: If no project has this ID
        """
        project = await self.get_project(project_id)
        await self.repository.delete(project)
        logger.info("Project deleted", extra={"project_id": project_id})
