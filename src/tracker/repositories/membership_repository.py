"""Repository for ProjectMember entity."""

from collections.abc import Collection
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select

from src.tracker.models import ProjectMember, ProjectRole
from src.tracker.repositories.base import BaseRepository


class MembershipRepository(BaseRepository[ProjectMember]):
    """Repository for direct project memberships.

    The table is keyed by (org_id, project_id, user_id); writes are upserts.
    """

    model = ProjectMember

    async def get_membership(
        self, org_id: UUID, project_id: UUID, user_id: UUID
    ) -> ProjectMember | None:
        """Get the direct membership of a user on a project."""
        result = await self.session.execute(
            select(ProjectMember).where(
                ProjectMember.org_id == org_id,
                ProjectMember.project_id == project_id,
                ProjectMember.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def has_membership(self, org_id: UUID, project_id: UUID, user_id: UUID) -> bool:
        """Check if a direct membership row exists."""
        result = await self.session.execute(
            select(ProjectMember.user_id).where(
                ProjectMember.org_id == org_id,
                ProjectMember.project_id == project_id,
                ProjectMember.user_id == user_id,
            )
        )
        return result.first() is not None

    async def list_for_project(self, org_id: UUID, project_id: UUID) -> list[ProjectMember]:
        """List direct members of a project, oldest first."""
        result = await self.session.execute(
            select(ProjectMember)
            .where(
                ProjectMember.org_id == org_id,
                ProjectMember.project_id == project_id,
            )
            .order_by(ProjectMember.added_at, ProjectMember.user_id)  # type: ignore[arg-type]
        )
        return list(result.scalars().all())

    async def list_for_projects(
        self, org_id: UUID, project_ids: Collection[UUID]
    ) -> list[ProjectMember]:
        """List direct membership rows attached to any of the given projects."""
        if not project_ids:
            return []
        result = await self.session.execute(
            select(ProjectMember).where(
                ProjectMember.org_id == org_id,
                ProjectMember.project_id.in_(list(project_ids)),  # type: ignore[attr-defined]
            )
        )
        return list(result.scalars().all())

    async def get_user_rows(
        self, org_id: UUID, user_id: UUID, project_ids: Collection[UUID]
    ) -> dict[UUID, ProjectMember]:
        """Map project_id -> existing membership row of one user across several projects."""
        if not project_ids:
            return {}
        result = await self.session.execute(
            select(ProjectMember).where(
                ProjectMember.org_id == org_id,
                ProjectMember.user_id == user_id,
                ProjectMember.project_id.in_(list(project_ids)),  # type: ignore[attr-defined]
            )
        )
        return {row.project_id: row for row in result.scalars().all()}

    def create_membership(
        self,
        org_id: UUID,
        project_id: UUID,
        user_id: UUID,
        role: str = ProjectRole.VIEWER.value,
    ) -> ProjectMember:
        """Create a new membership (add to session, no commit)."""
        membership = ProjectMember(
            org_id=org_id,
            project_id=project_id,
            user_id=user_id,
            role=role,
        )
        self.session.add(membership)
        return membership

    async def delete_user_rows(
        self, org_id: UUID, user_id: UUID, project_ids: Collection[UUID]
    ) -> int:
        """Delete one user's rows on the given projects. Returns rows removed."""
        if not project_ids:
            return 0
        result = await self.session.execute(
            delete(ProjectMember).where(
                ProjectMember.org_id == org_id,  # type: ignore[arg-type]
                ProjectMember.user_id == user_id,  # type: ignore[arg-type]
                ProjectMember.project_id.in_(list(project_ids)),  # type: ignore[attr-defined]
            )
        )
        return result.rowcount or 0

    async def delete_for_project(self, org_id: UUID, project_id: UUID) -> int:
        """Delete every membership row of a project. Returns rows removed."""
        result = await self.session.execute(
            delete(ProjectMember).where(
                ProjectMember.org_id == org_id,  # type: ignore[arg-type]
                ProjectMember.project_id == project_id,  # type: ignore[arg-type]
            )
        )
        return result.rowcount or 0
