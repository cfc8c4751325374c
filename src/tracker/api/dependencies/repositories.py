"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.tracker.api.dependencies.db import DBSession
from src.tracker.repositories import (
    MembershipRepository,
    ProjectRepository,
    TaskRepository,
)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_membership_repository(session: DBSession) -> MembershipRepository:
    return MembershipRepository(session)


def get_task_repository(session: DBSession) -> TaskRepository:
    return TaskRepository(session)


ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
MembershipRepo = Annotated[MembershipRepository, Depends(get_membership_repository)]
TaskRepo = Annotated[TaskRepository, Depends(get_task_repository)]
