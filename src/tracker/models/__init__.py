"""Model exports.

Import from here: `from src.tracker.models import Project, ProjectMember`
"""

# Enums
from src.tracker.models.enums import (
    ProjectRole,
    ProjectSeverity,
    ProjectStatus,
    ProjectStatusFilter,
    TaskPriority,
    TaskStatus,
)

# Tables
from src.tracker.models.organization import Organization
from src.tracker.models.project import (
    Project,
    ProjectAccess,
    ProjectMember,
    ProjectSettings,
)
from src.tracker.models.task import (
    Task,
    TaskAssignment,
    TaskAttachment,
    TaskComment,
    TaskStatusLog,
    TaskWatcher,
)

__all__ = [
    # Enums
    "ProjectRole",
    "ProjectSeverity",
    "ProjectStatus",
    "ProjectStatusFilter",
    "TaskPriority",
    "TaskStatus",
    # Organization
    "Organization",
    # Project tree
    "Project",
    "ProjectAccess",
    "ProjectMember",
    "ProjectSettings",
    # Tasks
    "Task",
    "TaskAssignment",
    "TaskAttachment",
    "TaskComment",
    "TaskStatusLog",
    "TaskWatcher",
]
