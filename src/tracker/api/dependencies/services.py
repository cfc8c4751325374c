"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.tracker.api.dependencies.db import DBSession
from src.tracker.api.dependencies.repositories import MembershipRepo, ProjectRepo, TaskRepo
from src.tracker.services import (
    AccessPredicate,
    HierarchyResolver,
    MembershipPropagator,
    ProjectLifecycleManager,
)


def get_hierarchy_resolver(
    project_repo: ProjectRepo, membership_repo: MembershipRepo
) -> HierarchyResolver:
    """Get hierarchy resolver."""
    return HierarchyResolver(project_repo, membership_repo)


HierarchyDep = Annotated[HierarchyResolver, Depends(get_hierarchy_resolver)]


def get_membership_propagator(
    project_repo: ProjectRepo,
    membership_repo: MembershipRepo,
    resolver: HierarchyDep,
    session: DBSession,
) -> MembershipPropagator:
    """Get membership propagator sharing the request session."""
    return MembershipPropagator(project_repo, membership_repo, resolver, session)


PropagatorDep = Annotated[MembershipPropagator, Depends(get_membership_propagator)]


def get_access_predicate(membership_repo: MembershipRepo, task_repo: TaskRepo) -> AccessPredicate:
    """Get access predicate."""
    return AccessPredicate(membership_repo, task_repo)


AccessDep = Annotated[AccessPredicate, Depends(get_access_predicate)]


def get_project_service(
    project_repo: ProjectRepo,
    membership_repo: MembershipRepo,
    task_repo: TaskRepo,
    resolver: HierarchyDep,
    propagator: PropagatorDep,
    session: DBSession,
) -> ProjectLifecycleManager:
    """Get project lifecycle manager."""
    return ProjectLifecycleManager(
        project_repo,
        membership_repo,
        task_repo,
        resolver,
        propagator,
        session,
    )


ProjectServiceDep = Annotated[ProjectLifecycleManager, Depends(get_project_service)]
