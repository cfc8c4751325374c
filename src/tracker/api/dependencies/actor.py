"""Caller identity extracted from trusted request headers.

Authentication happens upstream; by the time a request reaches this
service, X-Org-Id, X-User-Id and X-Super-Admin are set by the gateway.
"""

from dataclasses import dataclass
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status

from src.tracker.api.dependencies.db import DBSession
from src.tracker.core.logging import bind_actor_context
from src.tracker.repositories import OrganizationRepository


@dataclass(frozen=True)
class Actor:
    """Who is calling, and in which organization."""

    org_id: UUID
    user_id: UUID
    is_super_admin: bool = False


async def get_actor(
    session: DBSession,
    x_org_id: Annotated[UUID | None, Header()] = None,
    x_user_id: Annotated[UUID | None, Header()] = None,
    x_super_admin: Annotated[bool, Header()] = False,
) -> Actor:
    """Validate the organization header and build the caller identity."""
    if x_org_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="X-Org-Id header is required",
        )
    if x_user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-User-Id header is required",
        )

    org = await OrganizationRepository(session).get_by_id(x_org_id)
    if org is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Organization not found",
        )
    if org.is_deleted:
        raise HTTPException(
            status_code=status.HTTP_410_GONE,
            detail="Organization has been deleted",
        )
    if not org.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Organization is inactive",
        )

    bind_actor_context(org.id, x_user_id, x_super_admin)
    return Actor(org_id=org.id, user_id=x_user_id, is_super_admin=x_super_admin)


CurrentActor = Annotated[Actor, Depends(get_actor)]


async def require_super_admin(actor: CurrentActor) -> Actor:
    """Require the caller to be a super admin."""
    if not actor.is_super_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Super admin privileges required",
        )
    return actor


SuperAdmin = Annotated[Actor, Depends(require_super_admin)]
