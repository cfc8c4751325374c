"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import OrganizationFactory, ProjectFactory, ...
"""

from tests.factories.base import BaseFactory, new_id, utc_now
from tests.factories.organization import OrganizationFactory
from tests.factories.project import (
    ProjectAccessFactory,
    ProjectFactory,
    ProjectMemberFactory,
    ProjectSettingsFactory,
)
from tests.factories.task import (
    TaskAssignmentFactory,
    TaskAttachmentFactory,
    TaskCommentFactory,
    TaskFactory,
    TaskStatusLogFactory,
    TaskWatcherFactory,
)

__all__ = [
    # Base
    "BaseFactory",
    "new_id",
    "utc_now",
    # Organization
    "OrganizationFactory",
    # Project
    "ProjectFactory",
    "ProjectSettingsFactory",
    "ProjectMemberFactory",
    "ProjectAccessFactory",
    # Task
    "TaskFactory",
    "TaskCommentFactory",
    "TaskAttachmentFactory",
    "TaskStatusLogFactory",
    "TaskAssignmentFactory",
    "TaskWatcherFactory",
]
