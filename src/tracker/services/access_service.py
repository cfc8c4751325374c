"""Project and task access checks."""

from uuid import UUID

from src.tracker.core.logging import get_logger
from src.tracker.models import ProjectRole
from src.tracker.repositories import MembershipRepository, TaskRepository

logger = get_logger(__name__)


class AccessPredicate:
    """Answers whether a user may see a project or a task.

    Project access is a single lookup of the direct row. Ancestor grants
    are already materialized onto descendants, so the ancestor chain is
    never walked here.
    """

    def __init__(self, membership_repo: MembershipRepository, task_repo: TaskRepository):
        self.membership_repo = membership_repo
        self.task_repo = task_repo

    async def has_access(
        self,
        org_id: UUID,
        project_id: UUID,
        user_id: UUID,
        is_super_admin: bool = False,
    ) -> bool:
        if is_super_admin:
            return True
        return await self.membership_repo.has_membership(org_id, project_id, user_id)

    async def can_access_task(
        self,
        org_id: UUID,
        task_id: UUID,
        user_id: UUID,
        is_super_admin: bool = False,
    ) -> bool:
        """Whether the user may see a task.

        Super admins always may. Otherwise the user needs a row on the
        task's project and must be an ADMIN there, the task's creator,
        or one of its assignees.
        """
        if is_super_admin:
            return True

        task = await self.task_repo.get_in_org(org_id, task_id)
        if task is None:
            return False

        membership = await self.membership_repo.get_membership(org_id, task.project_id, user_id)
        if membership is None:
            return False
        if membership.role_enum == ProjectRole.ADMIN:
            return True
        if task.created_by == user_id:
            return True

        allowed = await self.task_repo.is_assignee(org_id, task_id, user_id)
        if not allowed:
            logger.debug(
                "Task access denied",
                org_id=str(org_id),
                task_id=str(task_id),
                user_id=str(user_id),
            )
        return allowed
