"""Unit tests for AccessPredicate."""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from src.tracker.models import ProjectRole
from src.tracker.services import AccessPredicate
from tests.factories import ProjectMemberFactory, TaskFactory

pytestmark = pytest.mark.unit


@pytest.fixture
def mock_membership_repo() -> MagicMock:
    repo = MagicMock()
    repo.has_membership = AsyncMock(return_value=False)
    repo.get_membership = AsyncMock(return_value=None)
    return repo


@pytest.fixture
def mock_task_repo() -> MagicMock:
    repo = MagicMock()
    repo.get_in_org = AsyncMock(return_value=None)
    repo.is_assignee = AsyncMock(return_value=False)
    return repo


@pytest.fixture
def access(mock_membership_repo, mock_task_repo) -> AccessPredicate:
    return AccessPredicate(mock_membership_repo, mock_task_repo)


class TestHasAccess:
    async def test_super_admin_skips_lookup(self, access, mock_membership_repo):
        """Super admins pass without touching the store."""
        assert await access.has_access(uuid4(), uuid4(), uuid4(), is_super_admin=True)
        mock_membership_repo.has_membership.assert_not_awaited()

    async def test_direct_row_grants_access(self, access, mock_membership_repo):
        mock_membership_repo.has_membership.return_value = True
        org_id, project_id, user_id = uuid4(), uuid4(), uuid4()

        assert await access.has_access(org_id, project_id, user_id)
        mock_membership_repo.has_membership.assert_awaited_once_with(org_id, project_id, user_id)

    async def test_no_row_denies(self, access):
        assert not await access.has_access(uuid4(), uuid4(), uuid4())


class TestCanAccessTask:
    async def test_super_admin_always_passes(self, access, mock_task_repo):
        assert await access.can_access_task(uuid4(), uuid4(), uuid4(), is_super_admin=True)
        mock_task_repo.get_in_org.assert_not_awaited()

    async def test_missing_task_denied(self, access):
        assert not await access.can_access_task(uuid4(), uuid4(), uuid4())

    async def test_non_member_denied_even_as_creator(
        self, access, mock_task_repo, mock_membership_repo
    ):
        user_id = uuid4()
        mock_task_repo.get_in_org.return_value = TaskFactory.build(
            org_id=uuid4(), project_id=uuid4(), created_by=user_id
        )

        assert not await access.can_access_task(uuid4(), uuid4(), user_id)

    async def test_project_admin_passes(self, access, mock_task_repo, mock_membership_repo):
        mock_task_repo.get_in_org.return_value = TaskFactory.build(
            org_id=uuid4(), project_id=uuid4()
        )
        mock_membership_repo.get_membership.return_value = ProjectMemberFactory.admin()

        assert await access.can_access_task(uuid4(), uuid4(), uuid4())
        mock_task_repo.is_assignee.assert_not_awaited()

    async def test_creator_passes(self, access, mock_task_repo, mock_membership_repo):
        user_id = uuid4()
        mock_task_repo.get_in_org.return_value = TaskFactory.build(
            org_id=uuid4(), project_id=uuid4(), created_by=user_id
        )
        mock_membership_repo.get_membership.return_value = ProjectMemberFactory.build(
            role=ProjectRole.MEMBER.value
        )

        assert await access.can_access_task(uuid4(), uuid4(), user_id)

    async def test_assignee_passes(self, access, mock_task_repo, mock_membership_repo):
        mock_task_repo.get_in_org.return_value = TaskFactory.build(
            org_id=uuid4(), project_id=uuid4(), created_by=uuid4()
        )
        mock_membership_repo.get_membership.return_value = ProjectMemberFactory.build()
        mock_task_repo.is_assignee.return_value = True

        assert await access.can_access_task(uuid4(), uuid4(), uuid4())

    async def test_plain_member_denied(self, access, mock_task_repo, mock_membership_repo):
        mock_task_repo.get_in_org.return_value = TaskFactory.build(
            org_id=uuid4(), project_id=uuid4(), created_by=uuid4()
        )
        mock_membership_repo.get_membership.return_value = ProjectMemberFactory.build(
            role=ProjectRole.EDITOR.value
        )

        assert not await access.can_access_task(uuid4(), uuid4(), uuid4())
