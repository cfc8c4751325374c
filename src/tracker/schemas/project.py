"""Project schemas for API request/response and service-level patches."""

from datetime import UTC, datetime
from typing import Self
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from src.tracker.core.validators import MAX_SLUG_LENGTH, validate_project_slug_format
from src.tracker.models.enums import ProjectSeverity, ProjectStatus, TaskPriority


def _strip_description(v: str | None) -> str | None:
    if v is not None:
        v = v.strip()
        if not v:
            return None
    return v


def _naive_utc(v: datetime | None) -> datetime | None:
    """Store times as naive UTC, the convention of every timestamp column."""
    if v is not None and v.tzinfo is not None:
        v = v.astimezone(UTC).replace(tzinfo=None)
    return v


class ProjectSettingsPatch(BaseModel):
    """Partial settings update: only fields explicitly set are written."""

    default_task_due_days: int | None = Field(default=None, ge=0, le=365)
    default_task_priority: TaskPriority | None = None
    auto_assign_enabled: bool | None = None
    auto_assign_user_id: UUID | None = None
    notification_enabled: bool | None = None
    notification_on_task_create: bool | None = None
    notification_on_task_complete: bool | None = None
    notification_on_comment: bool | None = None

    @field_validator(
        "default_task_due_days",
        "default_task_priority",
        "auto_assign_enabled",
        "notification_enabled",
        "notification_on_task_create",
        "notification_on_task_complete",
        "notification_on_comment",
    )
    @classmethod
    def reject_explicit_null(cls, v: object) -> object:
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class ProjectSettingsRead(BaseModel):
    """Schema for reading project settings."""

    default_task_due_days: int = 2
    default_task_priority: TaskPriority = TaskPriority.MEDIUM
    auto_assign_enabled: bool = False
    auto_assign_user_id: UUID | None = None
    notification_enabled: bool = True
    notification_on_task_create: bool = True
    notification_on_task_complete: bool = True
    notification_on_comment: bool = True

    model_config = {"from_attributes": True}


class ProjectCreate(BaseModel):
    """Schema for creating a project, optionally under a parent."""

    name: str = Field(min_length=1, max_length=200)
    slug: str | None = Field(default=None, min_length=1, max_length=MAX_SLUG_LENGTH)
    parent_id: UUID | None = None
    status: ProjectStatus = ProjectStatus.ACTIVE
    severity: ProjectSeverity = ProjectSeverity.MEDIUM
    start_at: datetime | None = None
    end_at: datetime | None = None
    description: str | None = Field(default=None, max_length=2000)
    settings: ProjectSettingsPatch | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Project name cannot be empty or whitespace only")
        return v

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return validate_project_slug_format(v)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return _strip_description(v)

    @field_validator("start_at", "end_at")
    @classmethod
    def normalize_dates(cls, v: datetime | None) -> datetime | None:
        return _naive_utc(v)

    @model_validator(mode="after")
    def validate_dates(self) -> Self:
        if self.start_at and self.end_at and self.end_at < self.start_at:
            raise ValueError("end_at cannot be earlier than start_at")
        return self


class ProjectUpdate(BaseModel):
    """Partial project update: only fields explicitly set are written.

    Status may move between any two values; no transition order is enforced.
    """

    name: str | None = Field(default=None, min_length=1, max_length=200)
    status: ProjectStatus | None = None
    severity: ProjectSeverity | None = None
    start_at: datetime | None = None
    end_at: datetime | None = None
    description: str | None = Field(default=None, max_length=2000)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str:
        if v is None:
            raise ValueError("Project name cannot be null")
        v = v.strip()
        if not v:
            raise ValueError("Project name cannot be empty or whitespace only")
        return v

    @field_validator("status", "severity")
    @classmethod
    def reject_explicit_null(cls, v: object) -> object:
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return _strip_description(v)

    @field_validator("start_at", "end_at")
    @classmethod
    def normalize_dates(cls, v: datetime | None) -> datetime | None:
        return _naive_utc(v)

    def changes(self) -> dict[str, object]:
        """Fields the caller actually sent, with enums reduced to their stored values."""
        data = self.model_dump(exclude_unset=True)
        for key in ("status", "severity"):
            if key in data:
                data[key] = data[key].value
        return data


class ProjectMove(BaseModel):
    """Schema for reparenting a project. A null parent makes it a root."""

    parent_id: UUID | None


class ProjectRead(BaseModel):
    """Schema for reading a project."""

    id: UUID
    org_id: UUID
    parent_id: UUID | None
    name: str
    slug: str
    status: ProjectStatus
    severity: ProjectSeverity
    start_at: datetime | None
    end_at: datetime | None
    description: str | None
    created_by: UUID | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
