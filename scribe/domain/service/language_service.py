"""Default language estimation domain service."""

import logfire

from scribe.domain.repository import IdentityRepository, UserRepository
from scribe.domain.value import AuthProvider, UserId

from .base import Service


class LanguageService(Service):
    """Guesses a user's preferred content language from their sign-up data."""

    def __init__(
        self,
        user_repository: UserRepository,
        identity_repository: IdentityRepository,
    ) -> None:
        self.user_repository = user_repository
        self.identity_repository = identity_repository

    async def estimate_default_language(self, user_id: UserId) -> str | None:
        """Estimate and store the user's default language.

        A Japanese email domain wins; otherwise the language Twitter reports
        for the account is used. Without either signal the user is left as is.

        Args:
            user_id: User ID

        Returns:
            The stored language code, or None if nothing could be estimated
        """
        with logfire.span(
            "language_service.estimate_default_language", user_id=str(user_id)
        ):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("Language estimation for missing user", user_id=str(user_id))
                return None

            language = None
            if user.email and user.email.endswith(".jp"):
                language = "ja"
            else:
                identity = await self.identity_repository.find_by_user_and_provider(
                    user_id, AuthProvider.TWITTER
                )
                if identity:
                    raw_info = (identity.auth_data_dump.get("extra") or {}).get(
                        "raw_info"
                    ) or {}
                    language = raw_info.get("lang")

            if language is None:
                logfire.info("No language signal", user_id=str(user_id))
                return None

            await self.user_repository.save(
                user.model_copy(update={"estimated_default_language": language})
            )
            logfire.info(
                "Default language estimated", user_id=str(user_id), language=language
            )
            return language
