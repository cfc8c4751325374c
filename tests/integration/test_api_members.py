"""HTTP tests for the membership endpoints."""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from src.tracker.models import ProjectMember, ProjectRole
from tests.helpers import actor_headers, add_member, count_rows, create_chain, create_project

pytestmark = pytest.mark.integration


class TestGrantAndRevoke:
    async def test_grant_fans_out_over_subtree(self, client: AsyncClient, db_session, org):
        admin, newcomer = uuid4(), uuid4()
        root, child, grandchild = await create_chain(db_session, org, depth=3)
        await add_member(db_session, root, admin, ProjectRole.ADMIN)
        await db_session.commit()

        response = await client.put(
            f"/api/v1/projects/{root.id}/members",
            json={"user_id": str(newcomer), "role": "EDITOR"},
            headers=actor_headers(org.id, admin),
        )

        assert response.status_code == 200
        assert response.json() == {
            "project_id": str(root.id),
            "user_id": str(newcomer),
            "affected_projects": 3,
        }
        assert await count_rows(db_session, ProjectMember, user_id=newcomer) == 3

        leaf = await client.get(
            f"/api/v1/projects/{grandchild.id}", headers=actor_headers(org.id, newcomer)
        )
        assert leaf.status_code == 200

    async def test_role_defaults_to_viewer(self, client: AsyncClient, db_session, org):
        project = await create_project(db_session, org)
        await db_session.commit()
        user = uuid4()

        await client.put(
            f"/api/v1/projects/{project.id}/members",
            json={"user_id": str(user)},
            headers=actor_headers(org.id, uuid4(), True),
        )
        members = await client.get(
            f"/api/v1/projects/{project.id}/members", headers=actor_headers(org.id, user)
        )

        assert [m["role"] for m in members.json()] == ["VIEWER"]

    async def test_grant_without_access_is_forbidden(self, client: AsyncClient, db_session, org):
        project = await create_project(db_session, org)
        await db_session.commit()

        response = await client.put(
            f"/api/v1/projects/{project.id}/members",
            json={"user_id": str(uuid4()), "role": "ADMIN"},
            headers=actor_headers(org.id, uuid4()),
        )

        assert response.status_code == 403
        assert await count_rows(db_session, ProjectMember, org_id=org.id) == 0

    async def test_unknown_role_is_unprocessable(self, client: AsyncClient, db_session, org):
        project = await create_project(db_session, org)
        await db_session.commit()

        response = await client.put(
            f"/api/v1/projects/{project.id}/members",
            json={"user_id": str(uuid4()), "role": "OWNER"},
            headers=actor_headers(org.id, uuid4(), True),
        )

        assert response.status_code == 422

    async def test_revoke_removes_subtree_rows(self, client: AsyncClient, db_session, org):
        user = uuid4()
        root, child = await create_chain(db_session, org, depth=2)
        for project in (root, child):
            await add_member(db_session, project, user, ProjectRole.EDITOR)
        await db_session.commit()

        response = await client.delete(
            f"/api/v1/projects/{root.id}/members/{user}",
            headers=actor_headers(org.id, uuid4(), True),
        )

        assert response.status_code == 200
        assert response.json()["affected_projects"] == 2
        assert await count_rows(db_session, ProjectMember, user_id=user) == 0


class TestEffectiveMembers:
    async def test_nearest_row_wins(self, client: AsyncClient, db_session, org):
        u1, u2 = uuid4(), uuid4()
        root, child = await create_chain(db_session, org, depth=2)
        await add_member(db_session, root, u1, ProjectRole.ADMIN)
        await add_member(db_session, root, u2, ProjectRole.VIEWER)
        await add_member(db_session, child, u2, ProjectRole.EDITOR)
        await db_session.commit()

        response = await client.get(
            f"/api/v1/projects/{child.id}/members/effective",
            headers=actor_headers(org.id, u2),
        )

        assert response.status_code == 200
        by_user = {m["user_id"]: m for m in response.json()}
        assert by_user[str(u1)]["role"] == "ADMIN"
        assert by_user[str(u1)]["inherited"] is True
        assert by_user[str(u1)]["source_project_id"] == str(root.id)
        assert by_user[str(u2)]["role"] == "EDITOR"
        assert by_user[str(u2)]["inherited"] is False
