"""Project membership endpoints.

Grants and revokes fan out over the whole subtree below the project.
"""

from uuid import UUID

from fastapi import APIRouter, status

from src.tracker.api.dependencies import (
    AccessDep,
    CurrentActor,
    HierarchyDep,
    PropagatorDep,
)
from src.tracker.api.v1.projects import require_project_access
from src.tracker.schemas.member import (
    EffectiveMemberRead,
    MemberGrant,
    MemberRead,
    SubtreeChangeRead,
)

router = APIRouter(prefix="/projects/{project_id}/members", tags=["members"])


@router.get(
    "",
    response_model=list[MemberRead],
    summary="List direct members",
    responses={
        200: {"description": "Direct membership rows, oldest first"},
        403: {"description": "No access to the project"},
        404: {"description": "Project not found"},
    },
)
async def list_members(
    project_id: UUID,
    actor: CurrentActor,
    propagator: PropagatorDep,
    access: AccessDep,
) -> list[MemberRead]:
    await require_project_access(access, actor, project_id)
    rows = await propagator.list_members(actor.org_id, project_id)
    return [MemberRead.model_validate(row) for row in rows]


@router.get(
    "/effective",
    response_model=list[EffectiveMemberRead],
    summary="List effective members",
    description=(
        "Members of the project and of every ancestor, one entry per user. "
        "The nearest row wins when a user appears at several levels."
    ),
    responses={
        200: {"description": "Resolved members"},
        403: {"description": "No access to the project"},
    },
)
async def list_effective_members(
    project_id: UUID,
    actor: CurrentActor,
    resolver: HierarchyDep,
    access: AccessDep,
) -> list[EffectiveMemberRead]:
    await require_project_access(access, actor, project_id)
    members = await resolver.effective_members(actor.org_id, project_id)
    return [
        EffectiveMemberRead.model_validate(m)
        for m in sorted(members, key=lambda m: str(m.user_id))
    ]


@router.put(
    "",
    response_model=SubtreeChangeRead,
    summary="Grant membership on subtree",
    description="Give a user a role on the project and on every project beneath it.",
    responses={
        200: {"description": "Role granted"},
        403: {"description": "No access to the project"},
        404: {"description": "Project not found"},
    },
)
async def grant_member(
    project_id: UUID,
    request: MemberGrant,
    actor: CurrentActor,
    propagator: PropagatorDep,
    access: AccessDep,
) -> SubtreeChangeRead:
    await require_project_access(access, actor, project_id)
    affected = await propagator.add_user_to_subtree(
        actor.org_id, project_id, request.user_id, request.role
    )
    return SubtreeChangeRead(
        project_id=project_id,
        user_id=request.user_id,
        affected_projects=len(affected),
    )


@router.delete(
    "/{user_id}",
    response_model=SubtreeChangeRead,
    status_code=status.HTTP_200_OK,
    summary="Revoke membership on subtree",
    description="Remove a user from the project and every project beneath it.",
    responses={
        200: {"description": "Membership removed"},
        403: {"description": "No access to the project"},
    },
)
async def revoke_member(
    project_id: UUID,
    user_id: UUID,
    actor: CurrentActor,
    propagator: PropagatorDep,
    access: AccessDep,
) -> SubtreeChangeRead:
    await require_project_access(access, actor, project_id)
    affected = await propagator.remove_user_from_subtree(actor.org_id, project_id, user_id)
    return SubtreeChangeRead(
        project_id=project_id,
        user_id=user_id,
        affected_projects=len(affected),
    )
