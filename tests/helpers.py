"""Test helper functions for common data creation patterns."""

from uuid import UUID

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from src.tracker.models import (
    Organization,
    Project,
    ProjectMember,
    ProjectRole,
    Task,
)
from tests.factories import (
    OrganizationFactory,
    ProjectFactory,
    ProjectMemberFactory,
    TaskFactory,
)


async def create_organization(session: AsyncSession, **org_kwargs) -> Organization:
    """Create an organization.

    Args:
        session: Database session
        **org_kwargs: Args passed to OrganizationFactory

    Returns:
        Created organization
    """
    org = OrganizationFactory.build(**org_kwargs)
    session.add(org)
    await session.flush()
    return org


async def create_project(
    session: AsyncSession,
    org: Organization,
    parent: Project | None = None,
    **project_kwargs,
) -> Project:
    """Insert a project row directly, bypassing the lifecycle service."""
    project = ProjectFactory.build(
        org_id=org.id,
        parent_id=parent.id if parent else None,
        **project_kwargs,
    )
    session.add(project)
    await session.flush()
    return project


async def create_chain(session: AsyncSession, org: Organization, depth: int) -> list[Project]:
    """Create a straight line of projects, root first."""
    chain: list[Project] = []
    parent = None
    for _ in range(depth):
        parent = await create_project(session, org, parent)
        chain.append(parent)
    return chain


async def add_member(
    session: AsyncSession,
    project: Project,
    user_id: UUID,
    role: ProjectRole = ProjectRole.VIEWER,
) -> ProjectMember:
    """Insert a single direct membership row (no propagation)."""
    member = ProjectMemberFactory.build(
        org_id=project.org_id,
        project_id=project.id,
        user_id=user_id,
        role=role.value,
    )
    session.add(member)
    await session.flush()
    return member


async def create_task(
    session: AsyncSession,
    project: Project,
    **task_kwargs,
) -> Task:
    task = TaskFactory.build(org_id=project.org_id, project_id=project.id, **task_kwargs)
    session.add(task)
    await session.flush()
    return task


async def count_rows(session: AsyncSession, model: type[SQLModel], **filters) -> int:
    """Count rows of a table matching column == value filters."""
    query = select(func.count()).select_from(model)
    for column, value in filters.items():
        query = query.where(getattr(model, column) == value)
    result = await session.execute(query)
    return result.scalar_one()


def actor_headers(org_id: UUID, user_id: UUID, super_admin: bool = False) -> dict[str, str]:
    """Identity headers the gateway would set on a request."""
    headers = {"X-Org-Id": str(org_id), "X-User-Id": str(user_id)}
    if super_admin:
        headers["X-Super-Admin"] = "true"
    return headers
