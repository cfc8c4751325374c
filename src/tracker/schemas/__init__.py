from src.tracker.schemas.member import (
    EffectiveMemberRead,
    MemberGrant,
    MemberRead,
    SubtreeChangeRead,
)
from src.tracker.schemas.pagination import PaginatedResponse
from src.tracker.schemas.project import (
    ProjectCreate,
    ProjectMove,
    ProjectRead,
    ProjectSettingsPatch,
    ProjectSettingsRead,
    ProjectUpdate,
)

__all__ = [
    "EffectiveMemberRead",
    "MemberGrant",
    "MemberRead",
    "PaginatedResponse",
    "ProjectCreate",
    "ProjectMove",
    "ProjectRead",
    "ProjectSettingsPatch",
    "ProjectSettingsRead",
    "ProjectUpdate",
    "SubtreeChangeRead",
]
