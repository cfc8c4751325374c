"""Repository for Task entity and its linked rows (org-scoped)."""

from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select

from src.tracker.models import (
    Task,
    TaskAssignment,
    TaskAttachment,
    TaskComment,
    TaskStatusLog,
    TaskWatcher,
)
from src.tracker.repositories.base import BaseRepository

# Tables hanging off a task, in the order they must be cleared before the task row.
TASK_LINKED_MODELS = (
    TaskComment,
    TaskAttachment,
    TaskStatusLog,
    TaskAssignment,
    TaskWatcher,
)


class TaskRepository(BaseRepository[Task]):
    """Repository for tasks. Only what the access and deletion paths need."""

    model = Task

    async def get_in_org(self, org_id: UUID, task_id: UUID) -> Task | None:
        """Get a live task by id within one organization."""
        result = await self.session.execute(
            select(Task).where(
                Task.org_id == org_id,
                Task.id == task_id,
                Task.deleted_at.is_(None),  # type: ignore[union-attr]
            )
        )
        return result.scalar_one_or_none()

    async def is_assignee(self, org_id: UUID, task_id: UUID, user_id: UUID) -> bool:
        """Check whether the user is assigned to the task."""
        result = await self.session.execute(
            select(TaskAssignment.user_id).where(
                TaskAssignment.org_id == org_id,
                TaskAssignment.task_id == task_id,
                TaskAssignment.user_id == user_id,
            )
        )
        return result.first() is not None

    async def list_ids_for_project(self, org_id: UUID, project_id: UUID) -> list[UUID]:
        """Ids of every task under a project, soft-deleted ones included."""
        result = await self.session.execute(
            select(Task.id).where(Task.org_id == org_id, Task.project_id == project_id)
        )
        return list(result.scalars().all())

    async def delete_for_project(self, org_id: UUID, project_id: UUID) -> int:
        """Delete every task of a project and the rows linked to them.

        Linked rows go first (comments, attachments, status log, assignments,
        watchers), then the tasks. Returns the number of tasks removed.
        """
        task_ids = await self.list_ids_for_project(org_id, project_id)
        if not task_ids:
            return 0

        for linked in TASK_LINKED_MODELS:
            await self.session.execute(
                delete(linked).where(
                    linked.org_id == org_id,  # type: ignore[attr-defined]
                    linked.task_id.in_(task_ids),  # type: ignore[attr-defined]
                )
            )

        result = await self.session.execute(
            delete(Task).where(
                Task.org_id == org_id,  # type: ignore[arg-type]
                Task.project_id == project_id,  # type: ignore[arg-type]
            )
        )
        return result.rowcount or 0
