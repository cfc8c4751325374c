"""Repository layer - data access abstraction."""

from src.tracker.repositories.base import BaseRepository
from src.tracker.repositories.membership_repository import MembershipRepository
from src.tracker.repositories.organization import OrganizationRepository
from src.tracker.repositories.project import ProjectRepository
from src.tracker.repositories.task import TaskRepository

__all__ = [
    "BaseRepository",
    "MembershipRepository",
    "OrganizationRepository",
    "ProjectRepository",
    "TaskRepository",
]
