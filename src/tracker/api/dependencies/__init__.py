"""FastAPI dependency injection definitions.

Re-exports all dependencies so routers import from one place.
"""

# Actor
from src.tracker.api.dependencies.actor import (
    Actor,
    CurrentActor,
    SuperAdmin,
    get_actor,
    require_super_admin,
)

# Database
from src.tracker.api.dependencies.db import DBSession, get_db_session

# Repositories
from src.tracker.api.dependencies.repositories import (
    MembershipRepo,
    ProjectRepo,
    TaskRepo,
    get_membership_repository,
    get_project_repository,
    get_task_repository,
)

# Services
from src.tracker.api.dependencies.services import (
    AccessDep,
    HierarchyDep,
    ProjectServiceDep,
    PropagatorDep,
    get_access_predicate,
    get_hierarchy_resolver,
    get_membership_propagator,
    get_project_service,
)

__all__ = [
    # Actor
    "Actor",
    "CurrentActor",
    "SuperAdmin",
    "get_actor",
    "require_super_admin",
    # Database
    "DBSession",
    "get_db_session",
    # Repositories
    "MembershipRepo",
    "ProjectRepo",
    "TaskRepo",
    "get_membership_repository",
    "get_project_repository",
    "get_task_repository",
    # Services
    "AccessDep",
    "HierarchyDep",
    "ProjectServiceDep",
    "PropagatorDep",
    "get_access_predicate",
    "get_hierarchy_resolver",
    "get_membership_propagator",
    "get_project_service",
]
