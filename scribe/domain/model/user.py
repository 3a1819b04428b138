"""User aggregate root.

Users sign in through one or more social providers (Twitter, GitHub) and
keep a short history of their previous usernames so old profile links can be
redirected.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from scribe.domain.model.common import DomainModel
from scribe.domain.value import UserId


class User(DomainModel):
    """User aggregate root - provider-agnostic.

    One user account can have one linked identity per provider. Provider
    specific fields are cached copies of what the last login reported.
    """

    id: UserId
    username: str
    name: Optional[str] = None
    email: Optional[str] = None
    summary: Optional[str] = None
    website_url: Optional[str] = None
    employer_url: Optional[str] = None
    profile_image_url: Optional[str] = None

    # Two-deep username history, rotated by rename()
    old_username: Optional[str] = None
    old_old_username: Optional[str] = None

    # Cached provider data
    twitter_username: Optional[str] = None
    twitter_followers_count: Optional[int] = None
    twitter_following_count: Optional[int] = None
    twitter_created_at: Optional[datetime] = None
    github_username: Optional[str] = None
    github_created_at: Optional[datetime] = None

    # Registration experiment and onboarding state
    signup_cta_variant: Optional[str] = None
    saw_onboarding: bool = True
    estimated_default_language: Optional[str] = None

    # Cached follow counters
    following_users_count: int = Field(default=0, ge=0)
    following_tags_count: int = Field(default=0, ge=0)
    following_orgs_count: int = Field(default=0, ge=0)

    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    def rename(self, new_username: str) -> "User":
        """Return a copy with ``new_username``, shifting the history fields.

        The previous username moves to ``old_username`` and the one before it
        to ``old_old_username``. Renaming to the current username is a no-op.
        """
        if new_username == self.username:
            return self
        return self.model_copy(
            update={
                "username": new_username,
                "old_username": self.username,
                "old_old_username": self.old_username,
            }
        )
