"""Project endpoints - org-scoped tree CRUD.

Every route checks the caller against the access predicate before
touching the project. Domain errors (NotFoundError, CycleViolationError,
TransactionFailure) are translated by the app-level exception handlers.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, Response, status

from src.tracker.api.dependencies import (
    AccessDep,
    Actor,
    CurrentActor,
    HierarchyDep,
    ProjectServiceDep,
    SuperAdmin,
)
from src.tracker.models import ProjectStatusFilter
from src.tracker.schemas.pagination import PaginatedResponse
from src.tracker.schemas.project import (
    ProjectCreate,
    ProjectMove,
    ProjectRead,
    ProjectSettingsPatch,
    ProjectSettingsRead,
    ProjectUpdate,
)
from src.tracker.services import AccessPredicate

router = APIRouter(prefix="/projects", tags=["projects"])


async def require_project_access(
    access: AccessPredicate, actor: Actor, project_id: UUID
) -> None:
    """Raise 403 unless the actor holds a membership row on the project."""
    allowed = await access.has_access(
        actor.org_id, project_id, actor.user_id, actor.is_super_admin
    )
    if not allowed:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"No access to project {project_id}",
        )


@router.get(
    "",
    response_model=PaginatedResponse[ProjectRead],
    summary="List projects",
    description="List the projects visible to the caller, newest first.",
    responses={
        200: {"description": "Paginated list of projects"},
    },
)
async def list_projects(
    actor: CurrentActor,
    service: ProjectServiceDep,
    status_filter: Annotated[
        ProjectStatusFilter,
        Query(alias="status", description="open, closed or all"),
    ] = ProjectStatusFilter.OPEN,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int | None, Query(ge=1, description="Max items to return")] = None,
) -> PaginatedResponse[ProjectRead]:
    """List projects with cursor-based pagination."""
    projects, next_cursor, has_more = await service.list_projects(
        actor.org_id,
        actor.user_id,
        actor.is_super_admin,
        status_filter=status_filter,
        cursor=cursor,
        limit=limit,
    )
    return PaginatedResponse(
        items=[ProjectRead.model_validate(p) for p in projects],
        next_cursor=next_cursor,
        has_more=has_more,
    )


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    description=(
        "Create a root project, or a child when parent_id is given. The caller "
        "becomes ADMIN and a child inherits its parent's members."
    ),
    responses={
        201: {"description": "Project created"},
        403: {"description": "No access to the parent project"},
        404: {"description": "Parent project not found"},
    },
)
async def create_project(
    request: ProjectCreate,
    actor: CurrentActor,
    service: ProjectServiceDep,
    access: AccessDep,
) -> ProjectRead:
    if request.parent_id is not None:
        await require_project_access(access, actor, request.parent_id)
    project = await service.create(actor.org_id, request, actor.user_id)
    return ProjectRead.model_validate(project)


@router.get(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Get project",
    responses={
        200: {"description": "Project details"},
        403: {"description": "No access to the project"},
        404: {"description": "Project not found"},
    },
)
async def get_project(
    project_id: UUID,
    actor: CurrentActor,
    service: ProjectServiceDep,
    access: AccessDep,
) -> ProjectRead:
    await require_project_access(access, actor, project_id)
    project = await service.get_project(actor.org_id, project_id)
    return ProjectRead.model_validate(project)


@router.patch(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Update project",
    description="Update only the fields present in the request body.",
    responses={
        200: {"description": "Project updated"},
        400: {"description": "end_at earlier than start_at"},
        403: {"description": "No access to the project"},
        404: {"description": "Project not found"},
    },
)
async def update_project(
    project_id: UUID,
    request: ProjectUpdate,
    actor: CurrentActor,
    service: ProjectServiceDep,
    access: AccessDep,
) -> ProjectRead:
    await require_project_access(access, actor, project_id)
    try:
        project = await service.update_project(actor.org_id, project_id, request)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e
    return ProjectRead.model_validate(project)


@router.post(
    "/{project_id}/move",
    response_model=ProjectRead,
    summary="Move project",
    description="Reparent a project. A null parent_id makes it a root.",
    responses={
        200: {"description": "Project moved"},
        403: {"description": "No access to the project or the new parent"},
        404: {"description": "Project or new parent not found"},
        409: {"description": "The move would create a cycle"},
    },
)
async def move_project(
    project_id: UUID,
    request: ProjectMove,
    actor: CurrentActor,
    service: ProjectServiceDep,
    access: AccessDep,
) -> ProjectRead:
    await require_project_access(access, actor, project_id)
    if request.parent_id is not None:
        await require_project_access(access, actor, request.parent_id)
    project = await service.move_project(actor.org_id, project_id, request.parent_id)
    return ProjectRead.model_validate(project)


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete project",
    description="Hard-delete a project together with its whole subtree. Super admins only.",
    responses={
        204: {"description": "Project deleted"},
        403: {"description": "Super admin privileges required"},
        404: {"description": "Project not found"},
    },
)
async def delete_project(
    project_id: UUID,
    actor: SuperAdmin,
    service: ProjectServiceDep,
) -> Response:
    await service.delete(actor.org_id, project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{project_id}/children",
    response_model=list[ProjectRead],
    summary="List child projects",
    responses={
        200: {"description": "Direct children, newest first"},
        403: {"description": "No access to the project"},
        404: {"description": "Project not found"},
    },
)
async def list_children(
    project_id: UUID,
    actor: CurrentActor,
    service: ProjectServiceDep,
    access: AccessDep,
) -> list[ProjectRead]:
    await require_project_access(access, actor, project_id)
    children = await service.list_children(actor.org_id, project_id)
    return [ProjectRead.model_validate(p) for p in children]


@router.get(
    "/{project_id}/ancestors",
    response_model=list[UUID],
    summary="List ancestor ids",
    description="Ids of the project's ancestors, root first.",
    responses={
        200: {"description": "Ancestor ids"},
        403: {"description": "No access to the project"},
        404: {"description": "Project not found"},
    },
)
async def list_ancestors(
    project_id: UUID,
    actor: CurrentActor,
    service: ProjectServiceDep,
    resolver: HierarchyDep,
    access: AccessDep,
) -> list[UUID]:
    await require_project_access(access, actor, project_id)
    await service.get_project(actor.org_id, project_id)
    return await resolver.ancestors(actor.org_id, project_id)


@router.get(
    "/{project_id}/settings",
    response_model=ProjectSettingsRead,
    summary="Get project settings",
    responses={
        200: {"description": "Stored settings, or defaults"},
        403: {"description": "No access to the project"},
        404: {"description": "Project not found"},
    },
)
async def get_project_settings(
    project_id: UUID,
    actor: CurrentActor,
    service: ProjectServiceDep,
    access: AccessDep,
) -> ProjectSettingsRead:
    await require_project_access(access, actor, project_id)
    return await service.get_settings(actor.org_id, project_id)


@router.patch(
    "/{project_id}/settings",
    response_model=ProjectSettingsRead,
    summary="Update project settings",
    responses={
        200: {"description": "Settings updated"},
        403: {"description": "No access to the project"},
        404: {"description": "Project not found"},
    },
)
async def update_project_settings(
    project_id: UUID,
    request: ProjectSettingsPatch,
    actor: CurrentActor,
    service: ProjectServiceDep,
    access: AccessDep,
) -> ProjectSettingsRead:
    await require_project_access(access, actor, project_id)
    return await service.update_settings(actor.org_id, project_id, request)
