"""ProjectRepository with CRUD operations.

Handles all database operations for rebranding Project entities.
Follows the layered architecture pattern: API -> Service -> Repository -> Database.

ERROR LOGGING REQUIREMENTS:
- Log method entry/exit at DEBUG level with parameters (sanitized)
- Log all exceptions with full stack trace and context
- Include entity IDs (project_id) in all logs
- Log state transitions (status changes) at INFO level
- Add timing logs for operations >1 second
"""

import time
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from brandshift.core.logging import db_logger, get_logger
from brandshift.models.project import Project
from brandshift.models.user import User

logger = get_logger(__name__)


class ProjectRepository:
    """Repository for Project CRUD operations.

    All methods use the AsyncSession given at construction and log
    failures before re-raising them.
    """

    TABLE_NAME = "projects"
    SLOW_OPERATION_THRESHOLD_MS = 1000

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _check_slow(self, query: str, start_time: float) -> float:
        duration_ms = (time.monotonic() - start_time) * 1000
        if duration_ms > self.SLOW_OPERATION_THRESHOLD_MS:
            db_logger.slow_query(
                query=query,
                duration_ms=duration_ms,
                table=self.TABLE_NAME,
            )
        return duration_ms

    async def create(
        self,
        name: str,
        brand_id: str,
        user_id: str | None = None,
        status: str = "draft",
        preferences: dict[str, Any] | None = None,
    ) -> Project:
        """Create a new project.

        Raises:
            IntegrityError: On foreign key or constraint violations
            SQLAlchemyError: On other database errors
        """
        start_time = time.monotonic()
        logger.debug(
            "Creating project",
            extra={"project_name": name, "brand_id": brand_id, "user_id": user_id},
        )

        try:
            project = Project(
                name=name,
                brand_id=brand_id,
                user_id=user_id,
                status=status,
                preferences=preferences or {},
                color_scheme={},
            )
            self.session.add(project)
            await self.session.flush()
            await self.session.refresh(project)

            duration_ms = self._check_slow("INSERT INTO projects", start_time)
            logger.debug(
                "Project created successfully",
                extra={
                    "project_id": project.id,
                    "project_name": name,
                    "duration_ms": round(duration_ms, 2),
                },
            )
            return project

        except IntegrityError as e:
            logger.error(
                "Failed to create project - integrity error",
                extra={
                    "project_name": name,
                    "brand_id": brand_id,
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
                exc_info=True,
            )
            raise

        except SQLAlchemyError as e:
            db_logger.transaction_failure(
                e,
                table=self.TABLE_NAME,
                context=f"Creating project name={name}",
            )
            raise

    async def get_by_id(self, project_id: str) -> Project | None:
        """Get a project by ID, or None if it does not exist."""
        start_time = time.monotonic()
        logger.debug("Fetching project by ID", extra={"project_id": project_id})

        try:
            result = await self.session.execute(
                select(Project).where(Project.id == project_id)
            )
            project = result.scalar_one_or_none()

            duration_ms = self._check_slow(
                f"SELECT FROM projects WHERE id={project_id}", start_time
            )
            logger.debug(
                "Project fetch completed",
                extra={
                    "project_id": project_id,
                    "found": project is not None,
                    "duration_ms": round(duration_ms, 2),
                },
            )
            return project

        except SQLAlchemyError as e:
            logger.error(
                "Failed to fetch project by ID",
                extra={
                    "project_id": project_id,
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
                exc_info=True,
            )
            raise

    async def list_all(
        self,
        limit: int = 100,
        offset: int = 0,
        user_id: str | None = None,
    ) -> list[Project]:
        """List projects, most recently updated first."""
        start_time = time.monotonic()
        logger.debug(
            "Listing projects",
            extra={"limit": limit, "offset": offset, "user_id": user_id},
        )

        try:
            stmt = select(Project).order_by(Project.updated_at.desc())
            if user_id:
                stmt = stmt.where(Project.user_id == user_id)
            result = await self.session.execute(stmt.limit(limit).offset(offset))
            projects = list(result.scalars().all())

            duration_ms = self._check_slow(
                f"SELECT FROM projects LIMIT {limit} OFFSET {offset}", start_time
            )
            logger.debug(
                "Project list completed",
                extra={
                    "count": len(projects),
                    "duration_ms": round(duration_ms, 2),
                },
            )
            return projects

        except SQLAlchemyError as e:
            logger.error(
                "Failed to list projects",
                extra={
                    "limit": limit,
                    "offset": offset,
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
                exc_info=True,
            )
            raise

    async def count(self, user_id: str | None = None) -> int:
        """Count projects, optionally for a single user."""
        try:
            stmt = select(func.count()).select_from(Project)
            if user_id:
                stmt = stmt.where(Project.user_id == user_id)
            result = await self.session.execute(stmt)
            return result.scalar_one()

        except SQLAlchemyError as e:
            logger.error(
                "Failed to count projects",
                extra={
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
                exc_info=True,
            )
            raise

    async def update(self, project: Project, values: dict[str, Any]) -> Project:
        """Apply field values to a loaded project and flush.

        Args:
            project: Project instance loaded in this session
            values: Mapping of column name to new value

        Returns:
            The refreshed Project instance
        """
        start_time = time.monotonic()
        logger.debug(
            "Updating project",
            extra={"project_id": project.id, "update_fields": list(values.keys())},
        )

        new_status = values.get("status")
        if new_status is not None and new_status != project.status:
            logger.info(
                "Project status transition",
                extra={
                    "project_id": project.id,
                    "from_status": project.status,
                    "to_status": new_status,
                },
            )

        try:
            for field, value in values.items():
                setattr(project, field, value)
            await self.session.flush()
            await self.session.refresh(project)

            self._check_slow(f"UPDATE projects WHERE id={project.id}", start_time)
            return project

        except SQLAlchemyError as e:
            db_logger.transaction_failure(
                e,
                table=self.TABLE_NAME,
                context=f"Updating project_id={project.id}",
            )
            raise

    async def delete(self, project: Project) -> None:
        """Delete a loaded project."""
        start_time = time.monotonic()
        logger.debug("Deleting project", extra={"project_id": project.id})

        try:
            await self.session.delete(project)
            await self.session.flush()
            self._check_slow(f"DELETE FROM projects WHERE id={project.id}", start_time)

        except SQLAlchemyError as e:
            db_logger.transaction_failure(
                e,
                table=self.TABLE_NAME,
                context=f"Deleting project_id={project.id}",
            )
            raise

    async def user_exists(self, user_id: str) -> bool:
        """Check whether a user with the given ID exists."""
        try:
            result = await self.session.execute(
                select(User.id).where(User.id == user_id)
            )
            return result.scalar_one_or_none() is not None

        except SQLAlchemyError as e:
            logger.error(
                "Failed to check user existence",
                extra={
                    "user_id": user_id,
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
                exc_info=True,
            )
            raise
