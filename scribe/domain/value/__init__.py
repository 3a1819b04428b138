"""Domain value objects for Scribe."""

from scribe.domain.value.identifiers import (
    FollowId,
    IdentityId,
    OrganizationId,
    TagId,
    UserId,
)
from scribe.domain.value.types import (
    AuthInfo,
    AuthPayload,
    AuthProvider,
    FollowableType,
    ProviderProfile,
    TagName,
)

__all__ = [
    # Identifiers
    "UserId",
    "IdentityId",
    "OrganizationId",
    "TagId",
    "FollowId",
    # Types
    "AuthInfo",
    "AuthPayload",
    "AuthProvider",
    "FollowableType",
    "ProviderProfile",
    "TagName",
]
