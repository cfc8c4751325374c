"""Shared enums for models."""

from enum import Enum


class ProjectStatus(str, Enum):
    """Project lifecycle status.

    The usual flow is PLANNING -> ACTIVE -> AT_RISK / ON_HOLD -> COMPLETED / CANCELED,
    but transitions are not enforced: any status may be set from any other.
    """

    PLANNING = "PLANNING"
    ACTIVE = "ACTIVE"
    AT_RISK = "AT_RISK"
    ON_HOLD = "ON_HOLD"
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"

    @property
    def is_closed(self) -> bool:
        return self in (ProjectStatus.COMPLETED, ProjectStatus.CANCELED)


class ProjectSeverity(str, Enum):
    """Project severity."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class ProjectRole(str, Enum):
    """User role within a project."""

    ADMIN = "ADMIN"
    EDITOR = "EDITOR"
    MEMBER = "MEMBER"
    VIEWER = "VIEWER"


class ProjectStatusFilter(str, Enum):
    """Status filter for project listings."""

    OPEN = "open"
    CLOSED = "closed"
    ALL = "all"


class TaskStatus(str, Enum):
    """Task status."""

    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    BLOCKED = "BLOCKED"
    DONE = "DONE"
    CANCELED = "CANCELED"


class TaskPriority(str, Enum):
    """Task priority, also used for a project's default task priority."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"
