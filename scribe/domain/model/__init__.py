"""Domain model entities for Scribe."""

from scribe.domain.model.follow import Follow
from scribe.domain.model.identity import Identity
from scribe.domain.model.organization import Organization
from scribe.domain.model.tag import Tag
from scribe.domain.model.user import User

__all__ = [
    "User",
    "Identity",
    "Organization",
    "Tag",
    "Follow",
]
