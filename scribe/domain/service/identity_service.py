"""Identity domain service."""

from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

import logfire
from pydantic import TypeAdapter

from scribe.domain.model.identity import Identity
from scribe.domain.repository import IdentityRepository
from scribe.domain.value import (
    AuthPayload,
    AuthProvider,
    IdentityId,
    ProviderProfile,
    UserId,
)

from .base import Service

# Twitter reports timestamps like "Wed Oct 10 20:19:24 +0000 2018"
TWITTER_TIME_FORMAT = "%a %b %d %H:%M:%S %z %Y"

_datetime_adapter = TypeAdapter(datetime)


def _parse_created_at(value: Any) -> datetime | None:
    """Parse a provider account creation timestamp, None if unparseable."""
    if value is None or isinstance(value, datetime):
        return value
    try:
        return datetime.strptime(str(value), TWITTER_TIME_FORMAT)
    except ValueError:
        pass
    try:
        return _datetime_adapter.validate_python(value)
    except ValueError:
        logfire.warn("Unparseable provider created_at", value=str(value))
        return None


def extract_profile(payload: AuthPayload) -> ProviderProfile:
    """Normalize the provider-specific parts of an auth payload.

    Args:
        payload: Authentication payload

    Returns:
        Provider profile with counts and account creation time
    """
    raw = payload.raw_info

    if payload.provider == AuthProvider.TWITTER:
        username = payload.info.nickname or raw.get("screen_name")
        followers = raw.get("followers_count")
        following = raw.get("friends_count")
    else:
        username = payload.info.nickname or raw.get("login")
        followers = raw.get("followers")
        following = raw.get("following")

    return ProviderProfile(
        username=username,
        email=payload.info.email,
        image=payload.info.image,
        followers_count=followers,
        following_count=following,
        created_at=_parse_created_at(raw.get("created_at")),
    )


class IdentityService(Service):
    """Domain service for identity operations."""

    def __init__(self, identity_repository: IdentityRepository) -> None:
        """Initialize identity service.

        Args:
            identity_repository: Identity repository
        """
        self.identity_repository = identity_repository

    async def get_identity_by_provider(
        self, provider: AuthProvider, uid: str
    ) -> Identity | None:
        """Get identity by provider and provider account id.

        Args:
            provider: Authentication provider
            uid: Provider account id

        Returns:
            Identity if found, None otherwise
        """
        with logfire.span(
            "identity_service.get_identity_by_provider",
            provider=provider.value,
            uid=uid,
        ):
            identity = await self.identity_repository.find_by_provider(provider, uid)
            if identity:
                logfire.info(
                    "Identity found",
                    provider=provider.value,
                    uid=uid,
                    user_id=str(identity.user_id),
                )
            else:
                logfire.info("Identity not found", provider=provider.value, uid=uid)
            return identity

    async def get_identity_for_user(
        self, user_id: UserId, provider: AuthProvider
    ) -> Identity | None:
        """Get the identity a user has linked for a provider.

        Args:
            user_id: User ID
            provider: Authentication provider

        Returns:
            Identity if linked, None otherwise
        """
        return await self.identity_repository.find_by_user_and_provider(
            user_id, provider
        )

    async def get_all_identities_for_user(self, user_id: UserId) -> list[Identity]:
        """Get all identities linked to a user.

        Args:
            user_id: User ID

        Returns:
            List of identities (may be empty)
        """
        with logfire.span(
            "identity_service.get_all_identities_for_user", user_id=str(user_id)
        ):
            identities = await self.identity_repository.find_all_by_user_id(user_id)
            logfire.info(
                "Identities retrieved for user",
                user_id=str(user_id),
                count=len(identities),
            )
            return identities

    def build_identity(self, user_id: UserId, payload: AuthPayload) -> Identity:
        """Create a new identity for a user from an auth payload (not saved).

        Args:
            user_id: Owning user
            payload: Authentication payload

        Returns:
            Identity carrying the raw dump and normalized fields
        """
        profile = extract_profile(payload)
        now = datetime.now(timezone.utc)
        return Identity(
            id=IdentityId(uuid4()),
            user_id=user_id,
            provider=payload.provider,
            uid=payload.uid,
            auth_data_dump=payload.dump(),
            provider_username=profile.username,
            provider_email=profile.email,
            followers_count=profile.followers_count,
            following_count=profile.following_count,
            provider_created_at=profile.created_at,
            created_at=now,
            updated_at=now,
            last_login_at=now,
        )

    def refresh_identity(self, identity: Identity, payload: AuthPayload) -> Identity:
        """Refresh an existing identity with the latest payload (not saved).

        Args:
            identity: Existing identity
            payload: Payload from the current login

        Returns:
            Updated copy of the identity
        """
        profile = extract_profile(payload)
        now = datetime.now(timezone.utc)
        return identity.model_copy(
            update={
                "auth_data_dump": payload.dump(),
                "provider_username": profile.username,
                "provider_email": profile.email,
                "followers_count": profile.followers_count,
                "following_count": profile.following_count,
                "provider_created_at": profile.created_at,
                "updated_at": now,
                "last_login_at": now,
            }
        )

    async def save(self, identity: Identity) -> Identity:
        """Save identity (create or update).

        Args:
            identity: Identity to save

        Returns:
            Saved identity
        """
        with logfire.span(
            "identity_service.save",
            identity_id=str(identity.id),
            provider=identity.provider.value,
            user_id=str(identity.user_id),
        ):
            saved = await self.identity_repository.save(identity)
            logfire.info(
                "Identity saved",
                identity_id=str(saved.id),
                provider=saved.provider.value,
                user_id=str(saved.user_id),
            )
            return saved
