"""Identity entity.

Links an external social login account to a user account.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from scribe.domain.model.common import DomainModel
from scribe.domain.value import AuthProvider, IdentityId, UserId


class Identity(DomainModel):
    """External authentication identity linked to a user account.

    Keyed by (provider, uid). Keeps the full payload the provider sent on the
    last login plus the fields normalized out of it.
    """

    id: IdentityId
    user_id: UserId
    provider: AuthProvider
    uid: str  # Permanent account id on the provider
    auth_data_dump: dict[str, Any] = Field(default_factory=dict)
    provider_username: Optional[str] = None  # Can change over time
    provider_email: Optional[str] = None
    followers_count: Optional[int] = None
    following_count: Optional[int] = None
    provider_created_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    last_login_at: Optional[datetime] = None
