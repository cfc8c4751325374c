"""Project tree factories for test data generation."""

from polyfactory import Use

from src.tracker.models import (
    Project,
    ProjectAccess,
    ProjectMember,
    ProjectRole,
    ProjectSettings,
    ProjectSeverity,
    ProjectStatus,
    TaskPriority,
)
from tests.factories.base import BaseFactory, new_id, utc_now


class ProjectFactory(BaseFactory):
    """Factory for Project rows. Pass org_id (and parent_id for children)."""

    __model__ = Project

    id = Use(new_id)
    parent_id = None
    name = Use(lambda: f"Project {new_id().hex[-8:]}")
    slug = Use(lambda: f"project-{new_id().hex[-8:]}")
    status = ProjectStatus.ACTIVE.value
    severity = ProjectSeverity.MEDIUM.value
    start_at = None
    end_at = None
    description = None
    created_by = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)
    deleted_at = None


class ProjectSettingsFactory(BaseFactory):
    __model__ = ProjectSettings

    default_task_due_days = 2
    default_task_priority = TaskPriority.MEDIUM.value
    auto_assign_enabled = False
    auto_assign_user_id = None
    notification_enabled = True
    notification_on_task_create = True
    notification_on_task_complete = True
    notification_on_comment = True
    created_at = Use(utc_now)
    updated_at = Use(utc_now)


class ProjectMemberFactory(BaseFactory):
    """Factory for direct membership rows. Pass org_id and project_id."""

    __model__ = ProjectMember

    user_id = Use(new_id)
    role = ProjectRole.VIEWER.value
    added_at = Use(utc_now)

    @classmethod
    def admin(cls, **kwargs):
        """Create an ADMIN membership."""
        return cls.build(role=ProjectRole.ADMIN.value, **kwargs)


class ProjectAccessFactory(BaseFactory):
    __model__ = ProjectAccess

    id = Use(new_id)
    user_id = Use(new_id)
    granted_by = None
    granted_at = Use(utc_now)
