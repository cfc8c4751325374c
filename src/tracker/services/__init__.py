from src.tracker.services.access_service import AccessPredicate
from src.tracker.services.hierarchy_service import (
    EffectiveMember,
    HierarchyResolver,
    ProjectForest,
)
from src.tracker.services.membership_service import MembershipPropagator
from src.tracker.services.project_service import ProjectLifecycleManager

__all__ = [
    "AccessPredicate",
    "EffectiveMember",
    "HierarchyResolver",
    "MembershipPropagator",
    "ProjectForest",
    "ProjectLifecycleManager",
]
