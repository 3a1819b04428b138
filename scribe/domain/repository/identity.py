"""Identity repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from scribe.domain.model.identity import Identity
from scribe.domain.value import AuthProvider, IdentityId, UserId


class IdentityRepository(ABC):
    """Repository for Identity entity.

    Manages the links between users and their social login accounts.
    """

    @abstractmethod
    async def find_by_id(self, identity_id: IdentityId) -> Optional[Identity]:
        """Find an identity by ID.

        Args:
            identity_id: The identity's unique identifier

        Returns:
            The identity if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_provider(
        self, provider: AuthProvider, uid: str
    ) -> Optional[Identity]:
        """Find an identity by provider and provider account id.

        Args:
            provider: The authentication provider
            uid: The account id on that provider

        Returns:
            The identity if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_and_provider(
        self, user_id: UserId, provider: AuthProvider
    ) -> Optional[Identity]:
        """Find the identity a user has for a provider.

        Args:
            user_id: The user's unique identifier
            provider: The authentication provider

        Returns:
            The identity if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all_by_user_id(self, user_id: UserId) -> list[Identity]:
        """Get all identities linked to a user, oldest first.

        Args:
            user_id: The user's unique identifier

        Returns:
            List of identities (may be empty)
        """
        pass

    @abstractmethod
    async def save(self, identity: Identity) -> Identity:
        """Save an identity (create or update).

        Args:
            identity: The identity to save

        Returns:
            The saved identity

        Raises:
            IntegrityError: If (provider, uid) or (user, provider) is already linked
        """
        pass
