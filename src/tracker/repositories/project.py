"""Repository for Project and ProjectSettings entities (org-scoped)."""

from collections.abc import Collection
from uuid import UUID

from sqlalchemy import and_, delete
from sqlmodel import select

from src.tracker.models import (
    Project,
    ProjectAccess,
    ProjectMember,
    ProjectSettings,
    ProjectStatus,
    ProjectStatusFilter,
)
from src.tracker.repositories.base import BaseRepository

CLOSED_STATUSES = tuple(s.value for s in ProjectStatus if s.is_closed)


class ProjectRepository(BaseRepository[Project]):
    """Repository for the project forest.

    Every query is scoped by org_id; a project id from another
    organization behaves exactly like a missing one.
    """

    model = Project

    async def get_in_org(
        self, org_id: UUID, project_id: UUID, include_deleted: bool = False
    ) -> Project | None:
        """Get a project by id within one organization."""
        query = select(Project).where(Project.org_id == org_id, Project.id == project_id)
        if not include_deleted:
            query = query.where(Project.deleted_at.is_(None))  # type: ignore[union-attr]
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def exists(self, org_id: UUID, project_id: UUID) -> bool:
        """Check whether a project row exists in the organization."""
        result = await self.session.execute(
            select(Project.id).where(Project.org_id == org_id, Project.id == project_id)
        )
        return result.scalar_one_or_none() is not None

    async def list_edges(self, org_id: UUID) -> list[tuple[UUID, UUID | None]]:
        """Fetch (id, parent_id) for every project in the organization in one query."""
        result = await self.session.execute(
            select(Project.id, Project.parent_id).where(Project.org_id == org_id)
        )
        return [(row[0], row[1]) for row in result.all()]

    async def existing_ids(self, org_id: UUID, project_ids: Collection[UUID]) -> set[UUID]:
        """Return the subset of project_ids that still exist in the organization."""
        if not project_ids:
            return set()
        result = await self.session.execute(
            select(Project.id).where(
                Project.org_id == org_id,
                Project.id.in_(list(project_ids)),  # type: ignore[attr-defined]
            )
        )
        return set(result.scalars().all())

    async def list_children(self, org_id: UUID, parent_id: UUID) -> list[Project]:
        """Live direct children of a project, newest first."""
        result = await self.session.execute(
            select(Project)
            .where(
                Project.org_id == org_id,
                Project.parent_id == parent_id,
                Project.deleted_at.is_(None),  # type: ignore[union-attr]
            )
            .order_by(Project.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def list_visible(
        self,
        org_id: UUID,
        user_id: UUID,
        is_super_admin: bool,
        status_filter: ProjectStatusFilter = ProjectStatusFilter.OPEN,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[Project], str | None, bool]:
        """List the projects a user can see, newest first.

        Super admins see every live project in the organization; everyone
        else sees the projects they hold a membership row on.

        Returns:
            Tuple of (items, next_cursor, has_more)
        """
        query = select(Project).where(
            Project.org_id == org_id,
            Project.deleted_at.is_(None),  # type: ignore[union-attr]
        )
        if not is_super_admin:
            query = query.join(
                ProjectMember,
                and_(
                    ProjectMember.project_id == Project.id,
                    ProjectMember.org_id == Project.org_id,
                ),
            ).where(ProjectMember.user_id == user_id)

        if status_filter == ProjectStatusFilter.OPEN:
            query = query.where(Project.status.not_in(CLOSED_STATUSES))  # type: ignore[attr-defined]
        elif status_filter == ProjectStatusFilter.CLOSED:
            query = query.where(Project.status.in_(CLOSED_STATUSES))  # type: ignore[attr-defined]

        return await self.paginate(query, cursor, limit, Project.created_at, Project.id)

    async def get_settings(self, org_id: UUID, project_id: UUID) -> ProjectSettings | None:
        """Get the settings row of a project, if one was stored."""
        result = await self.session.execute(
            select(ProjectSettings).where(
                ProjectSettings.org_id == org_id,
                ProjectSettings.project_id == project_id,
            )
        )
        return result.scalar_one_or_none()

    async def delete_project_level_rows(self, org_id: UUID, project_id: UUID) -> None:
        """Delete settings and access grants of one project (memberships are separate)."""
        await self.session.execute(
            delete(ProjectSettings).where(
                ProjectSettings.org_id == org_id,  # type: ignore[arg-type]
                ProjectSettings.project_id == project_id,  # type: ignore[arg-type]
            )
        )
        await self.session.execute(
            delete(ProjectAccess).where(
                ProjectAccess.org_id == org_id,  # type: ignore[arg-type]
                ProjectAccess.project_id == project_id,  # type: ignore[arg-type]
            )
        )

    async def delete_row(self, org_id: UUID, project_id: UUID) -> int:
        """Delete the project row itself. Returns the number of rows removed."""
        result = await self.session.execute(
            delete(Project).where(
                Project.org_id == org_id,  # type: ignore[arg-type]
                Project.id == project_id,  # type: ignore[arg-type]
            )
        )
        return result.rowcount or 0
