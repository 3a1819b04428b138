"""Username generation domain service."""

import secrets
import string
from typing import Callable, Optional

import logfire

from scribe.config import RegistrationSettings
from scribe.domain.repository import OrganizationRepository, UserRepository
from scribe.domain.value import UserId
from scribe.domain.value.types import (
    USERNAME_INVALID_CHARS,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
)

from .base import Service

SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


def random_suffix(length: int) -> str:
    """Random lowercase alphanumeric suffix of the given length."""
    return "".join(secrets.choice(SUFFIX_ALPHABET) for _ in range(length))


class UsernameService(Service):
    """Derives unique usernames for new users from provider nicknames.

    Usernames share one case-insensitive namespace with organization slugs.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        organization_repository: OrganizationRepository,
        settings: RegistrationSettings,
        suffix_factory: Optional[Callable[[int], str]] = None,
    ) -> None:
        """Initialize username service.

        Args:
            user_repository: User repository
            organization_repository: Organization repository
            settings: Registration settings (suffix length, attempt bound)
            suffix_factory: Produces a random suffix of the given length
        """
        self.user_repository = user_repository
        self.organization_repository = organization_repository
        self.settings = settings
        self.suffix_factory = suffix_factory or random_suffix

    @staticmethod
    def sanitize(nickname: str | None) -> str:
        """Strip characters outside the username charset and truncate.

        "invalid.username" becomes "invalidusername".
        """
        if not nickname:
            return ""
        return USERNAME_INVALID_CHARS.sub("", nickname)[:USERNAME_MAX_LENGTH]

    async def is_available(
        self, username: str, exclude_user_id: Optional[UserId] = None
    ) -> bool:
        """Check a username against both users and organization slugs.

        Args:
            username: Candidate username
            exclude_user_id: User allowed to already hold the username

        Returns:
            True if nobody else holds the username, ignoring case
        """
        if await self.user_repository.username_taken(username, exclude_user_id):
            return False
        return not await self.organization_repository.slug_exists(username)

    async def generate(self, nickname: str | None, force_suffix: bool = False) -> str:
        """Generate a unique username from a provider nickname.

        The sanitized nickname is used as-is when it is long enough and free.
        Otherwise a random suffix is appended, retrying up to
        ``max_username_attempts`` times before falling back to a fully random
        username.

        Args:
            nickname: Nickname reported by the provider (may be None)
            force_suffix: Skip the bare nickname (used after an insert collision)

        Returns:
            Username that was free at the time of the check
        """
        with logfire.span(
            "username_service.generate", nickname=nickname, force_suffix=force_suffix
        ):
            base = self.sanitize(nickname)

            if (
                not force_suffix
                and len(base) >= USERNAME_MIN_LENGTH
                and await self.is_available(base)
            ):
                logfire.info("Username derived from nickname", username=base)
                return base

            suffix_length = self.settings.username_suffix_length
            # Room for "_" plus the suffix within the maximum length
            stem = base[: USERNAME_MAX_LENGTH - suffix_length - 1] or "user"

            for attempt in range(1, self.settings.max_username_attempts + 1):
                candidate = f"{stem}_{self.suffix_factory(suffix_length)}"
                if await self.is_available(candidate):
                    logfire.info(
                        "Username generated with suffix",
                        base=base,
                        username=candidate,
                        attempt=attempt,
                    )
                    return candidate
                logfire.debug(
                    "Username collision, retrying", candidate=candidate, attempt=attempt
                )

            fallback = f"user_{secrets.token_hex(6)}"
            logfire.warn(
                "Username attempts exhausted, using random fallback",
                base=base,
                attempts=self.settings.max_username_attempts,
                username=fallback,
            )
            return fallback
