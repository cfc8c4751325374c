"""Project tree models - projects, settings, memberships and access grants."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Index
from sqlmodel import Field, SQLModel

from src.tracker.models.base import new_id, utc_now
from src.tracker.models.enums import (
    ProjectRole,
    ProjectSeverity,
    ProjectStatus,
    TaskPriority,
)


class Project(SQLModel, table=True):
    """A node in an organization's project forest.

    parent_id is None for roots. A parent always belongs to the same
    organization; the lifecycle service checks this before writing.
    """

    __tablename__ = "projects"
    __table_args__ = (Index("ix_projects_org_parent", "org_id", "parent_id"),)

    id: UUID = Field(default_factory=new_id, primary_key=True)
    org_id: UUID = Field(foreign_key="organizations.id", index=True)
    parent_id: UUID | None = Field(default=None, foreign_key="projects.id")
    name: str = Field(max_length=200)
    slug: str = Field(max_length=60)
    status: str = Field(default=ProjectStatus.ACTIVE.value, max_length=20)
    severity: str = Field(default=ProjectSeverity.MEDIUM.value, max_length=20)
    start_at: datetime | None = Field(default=None)
    end_at: datetime | None = Field(default=None)
    description: str | None = Field(default=None, max_length=2000)
    created_by: UUID | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)
    deleted_at: datetime | None = Field(default=None)

    @property
    def status_enum(self) -> ProjectStatus:
        """Get status as ProjectStatus enum."""
        return ProjectStatus(self.status)

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


class ProjectSettings(SQLModel, table=True):
    """Per-project defaults for tasks and notifications (one row per project)."""

    __tablename__ = "project_settings"

    project_id: UUID = Field(foreign_key="projects.id", primary_key=True)
    org_id: UUID = Field(foreign_key="organizations.id", index=True)
    default_task_due_days: int = Field(default=2, ge=0)
    default_task_priority: str = Field(default=TaskPriority.MEDIUM.value, max_length=20)
    auto_assign_enabled: bool = Field(default=False)
    auto_assign_user_id: UUID | None = Field(default=None)
    notification_enabled: bool = Field(default=True)
    notification_on_task_create: bool = Field(default=True)
    notification_on_task_complete: bool = Field(default=True)
    notification_on_comment: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class ProjectMember(SQLModel, table=True):
    """Direct membership of a user in a project.

    Rows are materialized down the tree on grant, so a descendant's rows
    already include members granted on any of its ancestors.
    """

    __tablename__ = "project_members"
    __table_args__ = (Index("ix_project_members_org_user", "org_id", "user_id"),)

    org_id: UUID = Field(foreign_key="organizations.id", primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", primary_key=True)
    user_id: UUID = Field(primary_key=True)
    role: str = Field(default=ProjectRole.VIEWER.value, max_length=20)
    added_at: datetime = Field(default_factory=utc_now)

    @property
    def role_enum(self) -> ProjectRole:
        return ProjectRole(self.role)


class ProjectAccess(SQLModel, table=True):
    """Explicit access grant recorded against a project."""

    __tablename__ = "project_access"

    id: UUID = Field(default_factory=new_id, primary_key=True)
    org_id: UUID = Field(foreign_key="organizations.id", index=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True)
    user_id: UUID = Field(index=True)
    granted_by: UUID | None = Field(default=None)
    granted_at: datetime = Field(default_factory=utc_now)
