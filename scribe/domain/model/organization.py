"""Organization entity."""

from datetime import datetime

from pydantic import Field

from scribe.domain.model.common import DomainModel
from scribe.domain.value import OrganizationId


class Organization(DomainModel):
    """Organization publishing under its own profile.

    The slug lives in the same URL namespace as usernames, so neither may
    collide with the other (case-insensitively).
    """

    id: OrganizationId
    name: str
    slug: str
    created_at: datetime = Field(default_factory=datetime.now)
