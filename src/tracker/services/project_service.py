"""Project lifecycle service: create, read, update, move, delete."""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.tracker.core.config import get_settings
from src.tracker.core.db import atomic
from src.tracker.core.exceptions import CycleViolationError, NotFoundError, TransactionFailure
from src.tracker.core.logging import get_logger
from src.tracker.core.validators import slugify
from src.tracker.models import (
    Project,
    ProjectRole,
    ProjectSettings,
    ProjectStatusFilter,
)
from src.tracker.models.base import utc_now
from src.tracker.repositories import MembershipRepository, ProjectRepository, TaskRepository
from src.tracker.schemas.project import (
    ProjectCreate,
    ProjectSettingsPatch,
    ProjectSettingsRead,
    ProjectUpdate,
)
from src.tracker.services.hierarchy_service import HierarchyResolver
from src.tracker.services.membership_service import MembershipPropagator

logger = get_logger(__name__)


def _settings_values(patch: ProjectSettingsPatch | None) -> dict[str, Any]:
    if patch is None:
        return {}
    values = patch.model_dump(exclude_unset=True)
    if "default_task_priority" in values:
        values["default_task_priority"] = values["default_task_priority"].value
    return values


class ProjectLifecycleManager:
    """Service for project lifecycle operations.

    Create and delete each run as a single transaction: if any step fails,
    none of their writes are visible afterwards.
    """

    def __init__(
        self,
        project_repo: ProjectRepository,
        membership_repo: MembershipRepository,
        task_repo: TaskRepository,
        resolver: HierarchyResolver,
        propagator: MembershipPropagator,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.membership_repo = membership_repo
        self.task_repo = task_repo
        self.resolver = resolver
        self.propagator = propagator
        self.session = session

    async def create(self, org_id: UUID, data: ProjectCreate, creator_id: UUID) -> Project:
        """Create a project, its settings, and its initial memberships.

        The creator gets an ADMIN row. When the project has a parent, the
        parent's direct members are then copied onto it, without touching
        the creator's row.

        Raises:
            NotFoundError: parent_id is not a live project of the organization.
        """
        async with atomic(self.session):
            if data.parent_id is not None:
                parent = await self.project_repo.get_in_org(org_id, data.parent_id)
                if parent is None:
                    raise NotFoundError("project", data.parent_id, org_id)

            project = Project(
                org_id=org_id,
                parent_id=data.parent_id,
                name=data.name,
                slug=data.slug or slugify(data.name),
                status=data.status.value,
                severity=data.severity.value,
                start_at=data.start_at,
                end_at=data.end_at,
                description=data.description,
                created_by=creator_id,
            )
            self.project_repo.add(project)
            await self.project_repo.flush()

            self.session.add(
                ProjectSettings(
                    project_id=project.id,
                    org_id=org_id,
                    **_settings_values(data.settings),
                )
            )

            self.membership_repo.create_membership(
                org_id, project.id, creator_id, ProjectRole.ADMIN.value
            )
            await self.membership_repo.flush()

            if data.parent_id is not None:
                await self.propagator.seed_from_parent(org_id, project.id, data.parent_id)

        logger.info(
            "Project created",
            org_id=str(org_id),
            project_id=str(project.id),
            parent_id=str(data.parent_id) if data.parent_id else None,
            created_by=str(creator_id),
        )
        return project

    async def delete(self, org_id: UUID, project_id: UUID) -> int:
        """Hard-delete a project and its entire subtree.

        For every project, parent before children: tasks and their linked
        rows, then memberships, settings and access grants. Project rows
        are removed last, deepest first. Returns the number of projects
        deleted.

        Raises:
            NotFoundError: project_id is not in the organization.
            TransactionFailure: a project row disappeared mid-delete.
        """
        async with atomic(self.session):
            if not await self.project_repo.exists(org_id, project_id):
                raise NotFoundError("project", project_id, org_id)

            forest = await self.resolver.load_forest(org_id)
            subtree = forest.subtree_preorder(project_id)

            tasks_removed = 0
            members_removed = 0
            for node_id in subtree:
                tasks_removed += await self.task_repo.delete_for_project(org_id, node_id)
                members_removed += await self.membership_repo.delete_for_project(org_id, node_id)
                await self.project_repo.delete_project_level_rows(org_id, node_id)

            projects_removed = 0
            for node_id in reversed(subtree):
                projects_removed += await self.project_repo.delete_row(org_id, node_id)

            if projects_removed != len(subtree):
                raise TransactionFailure(
                    f"Expected to delete {len(subtree)} project(s), deleted {projects_removed}"
                )

        logger.info(
            "Project subtree deleted",
            org_id=str(org_id),
            project_id=str(project_id),
            projects_removed=projects_removed,
            tasks_removed=tasks_removed,
            memberships_removed=members_removed,
        )
        return projects_removed

    async def get_project(self, org_id: UUID, project_id: UUID) -> Project:
        project = await self.project_repo.get_in_org(org_id, project_id)
        if project is None:
            raise NotFoundError("project", project_id, org_id)
        return project

    async def list_projects(
        self,
        org_id: UUID,
        user_id: UUID,
        is_super_admin: bool = False,
        status_filter: ProjectStatusFilter = ProjectStatusFilter.OPEN,
        cursor: str | None = None,
        limit: int | None = None,
    ) -> tuple[list[Project], str | None, bool]:
        """Projects visible to the user, newest first, one page at a time."""
        settings = get_settings()
        if limit is None:
            limit = settings.projects_page_size_default
        limit = max(1, min(limit, settings.projects_page_size_max))

        return await self.project_repo.list_visible(
            org_id,
            user_id,
            is_super_admin,
            status_filter=status_filter,
            cursor=cursor,
            limit=limit,
        )

    async def list_children(self, org_id: UUID, project_id: UUID) -> list[Project]:
        await self.get_project(org_id, project_id)
        return await self.project_repo.list_children(org_id, project_id)

    async def update_project(self, org_id: UUID, project_id: UUID, patch: ProjectUpdate) -> Project:
        """Apply a partial update. The parent is changed only through move_project."""
        changes = patch.changes()
        async with atomic(self.session):
            project = await self.get_project(org_id, project_id)

            start_at: datetime | None = changes.get("start_at", project.start_at)
            end_at: datetime | None = changes.get("end_at", project.end_at)
            if start_at and end_at and end_at < start_at:
                raise ValueError("end_at cannot be earlier than start_at")

            for field, value in changes.items():
                setattr(project, field, value)
            project.updated_at = utc_now()

        logger.info(
            "Project updated",
            org_id=str(org_id),
            project_id=str(project_id),
            fields=sorted(changes),
        )
        return project

    async def move_project(
        self, org_id: UUID, project_id: UUID, new_parent_id: UUID | None
    ) -> Project:
        """Reparent a project, or make it a root when new_parent_id is None.

        Membership rows are left as they are; the moved subtree keeps the
        rows it already had.

        Raises:
            NotFoundError: the project or the new parent does not exist.
            CycleViolationError: the new parent is the project or one of
                its descendants.
        """
        async with atomic(self.session):
            project = await self.get_project(org_id, project_id)

            if new_parent_id is not None:
                if new_parent_id == project_id:
                    raise CycleViolationError(project_id, new_parent_id)
                await self.get_project(org_id, new_parent_id)

                forest = await self.resolver.load_forest(org_id)
                if forest.would_create_cycle(project_id, new_parent_id):
                    raise CycleViolationError(project_id, new_parent_id)

            previous_parent_id = project.parent_id
            project.parent_id = new_parent_id
            project.updated_at = utc_now()

        logger.info(
            "Project moved",
            org_id=str(org_id),
            project_id=str(project_id),
            from_parent=str(previous_parent_id) if previous_parent_id else None,
            to_parent=str(new_parent_id) if new_parent_id else None,
        )
        return project

    async def get_settings(self, org_id: UUID, project_id: UUID) -> ProjectSettingsRead:
        """Stored settings of a project, or the defaults when none were stored."""
        await self.get_project(org_id, project_id)
        row = await self.project_repo.get_settings(org_id, project_id)
        if row is None:
            return ProjectSettingsRead()
        return ProjectSettingsRead.model_validate(row)

    async def update_settings(
        self, org_id: UUID, project_id: UUID, patch: ProjectSettingsPatch
    ) -> ProjectSettingsRead:
        values = _settings_values(patch)
        async with atomic(self.session):
            await self.get_project(org_id, project_id)
            row = await self.project_repo.get_settings(org_id, project_id)
            if row is None:
                row = ProjectSettings(project_id=project_id, org_id=org_id)
                self.session.add(row)

            for field, value in values.items():
                setattr(row, field, value)
            row.updated_at = utc_now()

        logger.info(
            "Project settings updated",
            org_id=str(org_id),
            project_id=str(project_id),
            fields=sorted(values),
        )
        return ProjectSettingsRead.model_validate(row)
