"""Follow entity."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from scribe.domain.model.common import DomainModel
from scribe.domain.value import FollowableType, FollowId, UserId


class Follow(DomainModel):
    """A user following another user, a tag or an organization.

    One follow per (follower, followable_type, followable_id).
    """

    id: FollowId
    follower_id: UserId
    followable_type: FollowableType
    followable_id: UUID
    created_at: datetime = Field(default_factory=datetime.now)
