"""Strongly typed identifiers for Scribe domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
IdentityId = NewType("IdentityId", UUID)
OrganizationId = NewType("OrganizationId", UUID)
TagId = NewType("TagId", UUID)
FollowId = NewType("FollowId", UUID)
