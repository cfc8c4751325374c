"""Task models - tasks and the rows hanging off them."""

from datetime import datetime
from uuid import UUID

from sqlmodel import Field, SQLModel

from src.tracker.models.base import new_id, utc_now
from src.tracker.models.enums import TaskPriority, TaskStatus


class Task(SQLModel, table=True):
    __tablename__ = "tasks"

    id: UUID = Field(default_factory=new_id, primary_key=True)
    org_id: UUID = Field(foreign_key="organizations.id", index=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True)
    title: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    status: str = Field(default=TaskStatus.OPEN.value, max_length=20)
    priority: str = Field(default=TaskPriority.MEDIUM.value, max_length=20)
    due_at: datetime | None = Field(default=None)
    created_by: UUID | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    deleted_at: datetime | None = Field(default=None)


class TaskComment(SQLModel, table=True):
    __tablename__ = "task_comments"

    id: UUID = Field(default_factory=new_id, primary_key=True)
    org_id: UUID = Field(foreign_key="organizations.id", index=True)
    task_id: UUID = Field(foreign_key="tasks.id", index=True)
    author_id: UUID
    body: str = Field(max_length=1000)
    created_at: datetime = Field(default_factory=utc_now)


class TaskAttachment(SQLModel, table=True):
    """Metadata for a file stored in the blob store; the bytes live elsewhere."""

    __tablename__ = "task_attachments"

    id: UUID = Field(default_factory=new_id, primary_key=True)
    org_id: UUID = Field(foreign_key="organizations.id", index=True)
    task_id: UUID = Field(foreign_key="tasks.id", index=True)
    file_name: str = Field(max_length=255)
    content_type: str | None = Field(default=None, max_length=100)
    size_bytes: int = Field(default=0, ge=0)
    storage_key: str = Field(max_length=500)
    uploaded_by: UUID | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)


class TaskStatusLog(SQLModel, table=True):
    __tablename__ = "task_status_logs"

    id: UUID = Field(default_factory=new_id, primary_key=True)
    org_id: UUID = Field(foreign_key="organizations.id", index=True)
    task_id: UUID = Field(foreign_key="tasks.id", index=True)
    from_status: str | None = Field(default=None, max_length=20)
    to_status: str = Field(max_length=20)
    changed_by: UUID | None = Field(default=None)
    changed_at: datetime = Field(default_factory=utc_now)


class TaskAssignment(SQLModel, table=True):
    __tablename__ = "task_assignments"

    org_id: UUID = Field(foreign_key="organizations.id", primary_key=True)
    task_id: UUID = Field(foreign_key="tasks.id", primary_key=True)
    user_id: UUID = Field(primary_key=True)
    assigned_at: datetime = Field(default_factory=utc_now)


class TaskWatcher(SQLModel, table=True):
    __tablename__ = "task_watchers"

    org_id: UUID = Field(foreign_key="organizations.id", primary_key=True)
    task_id: UUID = Field(foreign_key="tasks.id", primary_key=True)
    user_id: UUID = Field(primary_key=True)
    created_at: datetime = Field(default_factory=utc_now)
