"""In-memory identity repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from scribe.domain.model.identity import Identity
from scribe.domain.repository.identity import IdentityRepository
from scribe.domain.value import AuthProvider, IdentityId, UserId


class InMemoryIdentityRepository(IdentityRepository):
    """In-memory implementation of IdentityRepository for testing."""

    def __init__(self) -> None:
        self._identities: list[Identity] = []

    async def save(self, identity: Identity) -> Identity:
        """Save identity.

        Raises:
            IntegrityError: If (provider, uid) or (user, provider) is taken
        """
        for existing in self._identities:
            if existing.id == identity.id:
                continue
            if existing.provider == identity.provider and (
                existing.uid == identity.uid or existing.user_id == identity.user_id
            ):
                raise IntegrityError("Duplicate identity", None, Exception())

        # Check for existing identity with same ID (update case)
        for i, existing in enumerate(self._identities):
            if existing.id == identity.id:
                self._identities[i] = identity
                return identity

        self._identities.append(identity)
        return identity

    async def find_by_id(self, identity_id: IdentityId) -> Optional[Identity]:
        """Find identity by ID."""
        for identity in self._identities:
            if identity.id == identity_id:
                return identity
        return None

    async def find_by_provider(
        self, provider: AuthProvider, uid: str
    ) -> Optional[Identity]:
        """Find identity by provider and provider account id."""
        for identity in self._identities:
            if identity.provider == provider and identity.uid == uid:
                return identity
        return None

    async def find_by_user_and_provider(
        self, user_id: UserId, provider: AuthProvider
    ) -> Optional[Identity]:
        """Find the identity a user has for a provider."""
        for identity in self._identities:
            if identity.user_id == user_id and identity.provider == provider:
                return identity
        return None

    async def find_all_by_user_id(self, user_id: UserId) -> list[Identity]:
        """Find all identities for a user."""
        matches = [i for i in self._identities if i.user_id == user_id]
        matches.sort(key=lambda i: i.created_at)
        return matches
