"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from scribe.domain.model import Follow, Identity, Organization, Tag, User
from scribe.domain.value import (
    AuthProvider,
    FollowableType,
    FollowId,
    IdentityId,
    OrganizationId,
    TagId,
    TagName,
    UserId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    data = dict(row)
    data["id"] = UserId(_uuid(data["id"]))
    return User.model_validate(data)


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return user.model_dump()


def row_to_identity(row: Dict[str, Any]) -> Identity:
    """Convert database row to Identity domain model.

    Args:
        row: Database row as dict

    Returns:
        Identity domain model
    """
    return Identity(
        id=IdentityId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        provider=AuthProvider(row["provider"]),
        uid=row["uid"],
        auth_data_dump=row.get("auth_data_dump") or {},
        provider_username=row.get("provider_username"),
        provider_email=row.get("provider_email"),
        followers_count=row.get("followers_count"),
        following_count=row.get("following_count"),
        provider_created_at=row.get("provider_created_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        last_login_at=row.get("last_login_at"),
    )


def identity_to_dict(identity: Identity) -> Dict[str, Any]:
    """Convert Identity domain model to database dict.

    Args:
        identity: Identity domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = identity.model_dump()
    data["provider"] = identity.provider.value
    return data


def row_to_organization(row: Dict[str, Any]) -> Organization:
    """Convert database row to Organization domain model."""
    return Organization(
        id=OrganizationId(_uuid(row["id"])),
        name=row["name"],
        slug=row["slug"],
        created_at=row["created_at"],
    )


def organization_to_dict(organization: Organization) -> Dict[str, Any]:
    """Convert Organization domain model to database dict."""
    return organization.model_dump()


def row_to_tag(row: Dict[str, Any]) -> Tag:
    """Convert database row to Tag domain model."""
    return Tag(
        id=TagId(_uuid(row["id"])),
        name=TagName(row["name"]),
        created_at=row["created_at"],
    )


def tag_to_dict(tag: Tag) -> Dict[str, Any]:
    """Convert Tag domain model to database dict."""
    return {"id": tag.id, "name": tag.name.root, "created_at": tag.created_at}


def row_to_follow(row: Dict[str, Any]) -> Follow:
    """Convert database row to Follow domain model."""
    return Follow(
        id=FollowId(_uuid(row["id"])),
        follower_id=UserId(_uuid(row["follower_id"])),
        followable_type=FollowableType(row["followable_type"]),
        followable_id=_uuid(row["followable_id"]),
        created_at=row["created_at"],
    )


def follow_to_dict(follow: Follow) -> Dict[str, Any]:
    """Convert Follow domain model to database dict."""
    data = follow.model_dump()
    data["followable_type"] = follow.followable_type.value
    return data
