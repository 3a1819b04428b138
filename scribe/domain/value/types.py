"""Domain value objects for Scribe.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from scribe.domain.value.common import RootValueObject, ValueObject

USERNAME_MIN_LENGTH = 2
USERNAME_MAX_LENGTH = 30
USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")
SUMMARY_MAX_LENGTH = 200

# Characters outside the username charset, stripped from provider nicknames
USERNAME_INVALID_CHARS = re.compile(r"[^A-Za-z0-9_]")


class AuthProvider(str, Enum):
    """Supported social login providers."""

    TWITTER = "twitter"
    GITHUB = "github"


class FollowableType(str, Enum):
    """Type of entity a user can follow."""

    USER = "user"
    TAG = "tag"
    ORGANIZATION = "organization"


class TagName(RootValueObject[str]):
    """Tag name, e.g. 'python', 'webdev', 'career'.

    Must be lowercase alphanumeric, 1-30 characters.
    """

    @field_validator("root")
    @classmethod
    def validate_tag_name(cls, v: str) -> str:
        """Validate tag name format."""
        if not re.match(r"^[a-z0-9]{1,30}$", v):
            raise ValueError("Tag name must be 1-30 lowercase alphanumeric characters")
        return v


class AuthInfo(ValueObject):
    """Standardized profile section of a social login payload."""

    nickname: str | None = None
    email: str | None = None
    name: str | None = None
    image: str | None = None


class AuthPayload(ValueObject):
    """Authentication payload handed over by the OAuth layer.

    Mirrors the usual omniauth-style hash: provider, the provider's permanent
    account id (``uid``), normalized ``info`` and the provider's raw profile
    under ``extra["raw_info"]``.
    """

    provider: AuthProvider
    uid: str
    info: AuthInfo = AuthInfo()
    extra: dict[str, Any] = Field(default_factory=dict)

    @property
    def raw_info(self) -> dict[str, Any]:
        """Raw provider profile, empty if the provider sent none."""
        return self.extra.get("raw_info") or {}

    def dump(self) -> dict[str, Any]:
        """JSON-safe dump stored alongside the identity."""
        return self.model_dump(mode="json")


class ProviderProfile(ValueObject):
    """Fields normalized out of a provider's raw profile."""

    username: str | None = None
    email: str | None = None
    image: str | None = None
    followers_count: int | None = None
    following_count: int | None = None
    created_at: datetime | None = None
