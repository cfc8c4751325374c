"""Project membership schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from src.tracker.models.enums import ProjectRole


class MemberGrant(BaseModel):
    """Grant a role on a project and every project beneath it."""

    user_id: UUID
    role: ProjectRole = ProjectRole.VIEWER


class MemberRead(BaseModel):
    """A direct membership row."""

    user_id: UUID
    role: ProjectRole
    added_at: datetime

    model_config = {"from_attributes": True}


class EffectiveMemberRead(BaseModel):
    """A member as resolved through the ancestor chain."""

    user_id: UUID
    role: ProjectRole
    source_project_id: UUID
    inherited: bool

    model_config = {"from_attributes": True}


class SubtreeChangeRead(BaseModel):
    """Outcome of a grant or revoke fanned out over a subtree."""

    project_id: UUID
    user_id: UUID
    affected_projects: int
