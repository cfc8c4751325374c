"""Membership propagation across project subtrees."""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.tracker.core.db import atomic
from src.tracker.core.exceptions import NotFoundError, TransactionFailure
from src.tracker.core.logging import get_logger
from src.tracker.models import ProjectMember, ProjectRole
from src.tracker.repositories import MembershipRepository, ProjectRepository
from src.tracker.services.hierarchy_service import HierarchyResolver

logger = get_logger(__name__)


class MembershipPropagator:
    """Keeps direct membership rows consistent down the project forest.

    Inheritance is materialized: granting a role on a project writes a row
    on the project and on every descendant, and revoking removes them all.
    Each operation is one transaction and joins an enclosing one when
    called from inside another atomic block.
    """

    def __init__(
        self,
        project_repo: ProjectRepository,
        membership_repo: MembershipRepository,
        resolver: HierarchyResolver,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.membership_repo = membership_repo
        self.resolver = resolver
        self.session = session

    async def add_user_to_subtree(
        self,
        org_id: UUID,
        project_id: UUID,
        user_id: UUID,
        role: ProjectRole,
    ) -> list[UUID]:
        """Grant role to user on project_id and all of its descendants.

        Existing rows have their role replaced, so the user ends up with
        exactly one row per project in the subtree. Returns the ids of the
        projects written, project_id first.

        Raises:
            NotFoundError: project_id is not in the organization.
            TransactionFailure: a project in the subtree disappeared
                before the writes landed.
        """
        async with atomic(self.session):
            forest = await self.resolver.load_forest(org_id)
            if project_id not in forest:
                raise NotFoundError("project", project_id, org_id)

            targets = [project_id, *forest.descendants(project_id)]
            existing = await self.membership_repo.get_user_rows(org_id, user_id, targets)
            for target_id in targets:
                row = existing.get(target_id)
                if row is None:
                    self.membership_repo.create_membership(org_id, target_id, user_id, role.value)
                else:
                    row.role = role.value
            await self.membership_repo.flush()

            await self._ensure_projects_exist(org_id, targets)

        logger.info(
            "Membership granted on subtree",
            org_id=str(org_id),
            project_id=str(project_id),
            user_id=str(user_id),
            role=role.value,
            affected_projects=len(targets),
        )
        return targets

    async def remove_user_from_subtree(
        self,
        org_id: UUID,
        project_id: UUID,
        user_id: UUID,
    ) -> list[UUID]:
        """Remove user's rows on project_id and all of its descendants.

        Removing a user who holds no rows is a no-op. Rows on ancestors of
        project_id are left alone. Returns the ids of the projects covered.
        """
        async with atomic(self.session):
            forest = await self.resolver.load_forest(org_id)
            if project_id not in forest:
                targets: list[UUID] = []
                removed = 0
            else:
                targets = [project_id, *forest.descendants(project_id)]
                removed = await self.membership_repo.delete_user_rows(org_id, user_id, targets)

        logger.info(
            "Membership revoked on subtree",
            org_id=str(org_id),
            project_id=str(project_id),
            user_id=str(user_id),
            affected_projects=len(targets),
            rows_removed=removed,
        )
        return targets

    async def seed_from_parent(
        self,
        org_id: UUID,
        new_project_id: UUID,
        parent_project_id: UUID,
    ) -> int:
        """Copy the parent's direct members onto a freshly created child.

        Rows already present on the child (such as its creator's) are kept
        as they are. Returns the number of rows inserted.

        Raises:
            NotFoundError: either project is not in the organization.
        """
        async with atomic(self.session):
            if not await self.project_repo.exists(org_id, parent_project_id):
                raise NotFoundError("project", parent_project_id, org_id)
            if not await self.project_repo.exists(org_id, new_project_id):
                raise NotFoundError("project", new_project_id, org_id)

            parent_rows = await self.membership_repo.list_for_project(org_id, parent_project_id)
            present = {
                row.user_id
                for row in await self.membership_repo.list_for_project(org_id, new_project_id)
            }

            inserted = 0
            for row in parent_rows:
                if row.user_id in present:
                    continue
                self.membership_repo.create_membership(
                    org_id, new_project_id, row.user_id, row.role
                )
                inserted += 1
            await self.membership_repo.flush()

        logger.info(
            "Membership seeded from parent",
            org_id=str(org_id),
            project_id=str(new_project_id),
            parent_id=str(parent_project_id),
            rows_inserted=inserted,
        )
        return inserted

    async def list_members(self, org_id: UUID, project_id: UUID) -> list[ProjectMember]:
        """Direct membership rows of a project."""
        if not await self.project_repo.exists(org_id, project_id):
            raise NotFoundError("project", project_id, org_id)
        return await self.membership_repo.list_for_project(org_id, project_id)

    async def _ensure_projects_exist(self, org_id: UUID, project_ids: Sequence[UUID]) -> None:
        present = await self.project_repo.existing_ids(org_id, project_ids)
        missing = [pid for pid in project_ids if pid not in present]
        if missing:
            logger.error(
                "Projects vanished during membership fan-out",
                org_id=str(org_id),
                missing=[str(pid) for pid in missing],
            )
            raise TransactionFailure(
                f"{len(missing)} project(s) in the subtree disappeared mid-operation"
            )
