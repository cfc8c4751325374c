"""Project hierarchy resolution.

Traversal never recurses through the store. One query loads every
(id, parent_id) pair of the organization into a ProjectForest, and the
walks run in memory. The walks keep a visited set, so a cycle that slipped
into the table ends the walk instead of looping forever.
"""

from collections import defaultdict, deque
from collections.abc import Iterable
from dataclasses import dataclass
from uuid import UUID

from src.tracker.core.logging import get_logger
from src.tracker.models import ProjectRole
from src.tracker.repositories import MembershipRepository, ProjectRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class EffectiveMember:
    """A user's resolved role on a project.

    source_project_id is the project whose row supplied the role: the
    project itself for direct members, otherwise the nearest ancestor.
    """

    user_id: UUID
    role: ProjectRole
    source_project_id: UUID
    inherited: bool


class ProjectForest:
    """In-memory adjacency of one organization's projects."""

    def __init__(self, edges: Iterable[tuple[UUID, UUID | None]]):
        self._parent: dict[UUID, UUID | None] = dict(edges)
        self._children: dict[UUID, list[UUID]] = defaultdict(list)
        for project_id, parent_id in self._parent.items():
            if parent_id is not None and parent_id in self._parent:
                self._children[parent_id].append(project_id)
        for children in self._children.values():
            children.sort()

    def __contains__(self, project_id: object) -> bool:
        return project_id in self._parent

    def __len__(self) -> int:
        return len(self._parent)

    def parent_of(self, project_id: UUID) -> UUID | None:
        """Parent id, or None for roots and for parents outside this forest."""
        parent_id = self._parent.get(project_id)
        if parent_id is None or parent_id not in self._parent:
            return None
        return parent_id

    def descendants(self, project_id: UUID) -> list[UUID]:
        """Every project below project_id, level by level.

        Excludes project_id itself; empty for leaves and unknown ids.
        """
        if project_id not in self._parent:
            return []

        visited = {project_id}
        ordered: list[UUID] = []
        queue = deque([project_id])
        while queue:
            current = queue.popleft()
            for child in self._children.get(current, ()):
                if child in visited:
                    logger.warning(
                        "Cycle detected in project hierarchy",
                        project_id=str(project_id),
                        revisited=str(child),
                    )
                    continue
                visited.add(child)
                ordered.append(child)
                queue.append(child)
        return ordered

    def ancestors(self, project_id: UUID) -> list[UUID]:
        """Strict ancestors of project_id, root-most first.

        Empty for roots and unknown ids. The walk is bounded by the
        number of projects in the forest.
        """
        chain: list[UUID] = []
        seen = {project_id}
        current = self.parent_of(project_id)
        while current is not None and len(chain) < len(self._parent):
            if current in seen:
                logger.warning(
                    "Cycle detected in project hierarchy",
                    project_id=str(project_id),
                    revisited=str(current),
                )
                break
            seen.add(current)
            chain.append(current)
            current = self.parent_of(current)
        chain.reverse()
        return chain

    def subtree_preorder(self, project_id: UUID) -> list[UUID]:
        """project_id followed by its descendants, each parent before its children."""
        if project_id not in self._parent:
            return []

        visited = {project_id}
        ordered: list[UUID] = []
        stack = [project_id]
        while stack:
            current = stack.pop()
            ordered.append(current)
            for child in reversed(self._children.get(current, ())):
                if child in visited:
                    continue
                visited.add(child)
                stack.append(child)
        return ordered

    def would_create_cycle(self, project_id: UUID, new_parent_id: UUID) -> bool:
        """Whether attaching project_id under new_parent_id closes a loop."""
        if new_parent_id == project_id:
            return True
        return project_id in self.ancestors(new_parent_id)


class HierarchyResolver:
    """Tenant-scoped ancestor/descendant resolution over the project forest.

    Nothing is cached between calls; every operation re-reads the store.
    """

    def __init__(
        self,
        project_repo: ProjectRepository,
        membership_repo: MembershipRepository,
    ):
        self.project_repo = project_repo
        self.membership_repo = membership_repo

    async def load_forest(self, org_id: UUID) -> ProjectForest:
        """Fetch the organization's whole project forest in one query."""
        return ProjectForest(await self.project_repo.list_edges(org_id))

    async def descendants(self, org_id: UUID, project_id: UUID) -> set[UUID]:
        """Every project reachable downward from project_id (not including it)."""
        forest = await self.load_forest(org_id)
        return set(forest.descendants(project_id))

    async def ancestors(self, org_id: UUID, project_id: UUID) -> list[UUID]:
        """Strict ancestors of project_id, root-most first."""
        forest = await self.load_forest(org_id)
        return forest.ancestors(project_id)

    async def effective_members(self, org_id: UUID, project_id: UUID) -> set[EffectiveMember]:
        """Members of project_id and of all its ancestors, one entry per user.

        When a user holds rows at several levels, the deepest one wins: a
        row on the project itself beats any ancestor row, and a nearer
        ancestor beats a farther one.
        """
        forest = await self.load_forest(org_id)
        if project_id not in forest:
            return set()

        chain = [*forest.ancestors(project_id), project_id]
        level = {pid: index for index, pid in enumerate(chain)}
        rows = await self.membership_repo.list_for_projects(org_id, chain)

        resolved: dict[UUID, EffectiveMember] = {}
        for row in sorted(rows, key=lambda r: level[r.project_id]):
            resolved[row.user_id] = EffectiveMember(
                user_id=row.user_id,
                role=ProjectRole(row.role),
                source_project_id=row.project_id,
                inherited=row.project_id != project_id,
            )
        return set(resolved.values())
