"""Resolve identity use case."""

from datetime import datetime, timezone
from uuid import UUID, uuid4

import logfire
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError

from scribe.domain.error import IdentityConflictError, RegistrationError
from scribe.domain.model import Identity, User
from scribe.domain.service import (
    IdentityService,
    IntegrationService,
    UserService,
    UsernameService,
    extract_profile,
)
from scribe.domain.value import AuthPayload, UserId


class ResolveIdentityRequest(BaseModel):
    """Social login callback data.

    The payload comes from the OAuth layer; the current user is set when the
    visitor is already signed in and is linking another provider.
    """

    payload: AuthPayload
    current_user_id: str | None = None
    signup_cta_variant: str | None = None  # Experiment tag from the sign-up CTA


class ResolveIdentityResponse(BaseModel):
    """Resolved user, handed back for session establishment."""

    user_id: str
    username: str
    identity_id: str
    is_new_user: bool


class ResolveIdentityUseCase:
    """Use case mapping a social login to an application user.

    Resolution order:
    1. Signed-in user: link the provider identity to that user
    2. Known (provider, uid): sign in the identity's owner
    3. Known email: link a new identity to the user holding that email
    4. Otherwise: register a new user with a unique username
    """

    def __init__(
        self,
        user_service: UserService,
        identity_service: IdentityService,
        username_service: UsernameService,
        integration_service: IntegrationService,
    ) -> None:
        """Initialize resolve identity use case.

        Args:
            user_service: User domain service
            identity_service: Identity domain service
            username_service: Username generation service
            integration_service: Sign-up side effects (search, newsletter, jobs)
        """
        self.user_service = user_service
        self.identity_service = identity_service
        self.username_service = username_service
        self.integration_service = integration_service

    async def execute(self, request: ResolveIdentityRequest) -> ResolveIdentityResponse:
        """Resolve the payload to a persisted user with a linked identity.

        Args:
            request: Payload, optional signed-in user and sign-up variant

        Returns:
            Resolved user info

        Raises:
            NotFoundError: If the signed-in user does not exist
            IdentityConflictError: If the provider account cannot be linked
            RegistrationError: If a new user could not be persisted
        """
        payload = request.payload

        with logfire.span(
            "resolve_identity",
            provider=payload.provider.value,
            uid=payload.uid,
            signed_in=request.current_user_id is not None,
        ):
            existing_identity = await self.identity_service.get_identity_by_provider(
                payload.provider, payload.uid
            )

            if request.current_user_id:
                current_user = await self.user_service.get_by_id(
                    UserId(UUID(request.current_user_id))
                )
                user, identity = await self._link(
                    current_user, payload, existing_identity
                )
                return self._response(user, identity, is_new_user=False)

            if existing_identity:
                user = await self.user_service.get_by_id(existing_identity.user_id)
                identity = await self.identity_service.save(
                    self.identity_service.refresh_identity(existing_identity, payload)
                )
                logfire.info(
                    "Returning user signed in",
                    user_id=str(user.id),
                    provider=payload.provider.value,
                )
                return self._response(user, identity, is_new_user=False)

            if payload.info.email:
                email_user = await self.user_service.get_user_by_email(
                    payload.info.email
                )
                if email_user:
                    user, identity = await self._link(email_user, payload, None)
                    return self._response(user, identity, is_new_user=False)

            user, identity, is_new_user = await self._register(
                payload, request.signup_cta_variant
            )
            if is_new_user:
                await self.integration_service.user_registered(user)
            return self._response(user, identity, is_new_user=is_new_user)

    async def _link(
        self,
        user: User,
        payload: AuthPayload,
        existing_identity: Identity | None,
    ) -> tuple[User, Identity]:
        """Attach the payload's identity to an existing user.

        Sign-up variant and onboarding state are left untouched.
        """
        provider = payload.provider

        if existing_identity:
            if existing_identity.user_id != user.id:
                logfire.warn(
                    "Identity linked to another user",
                    provider=provider.value,
                    uid=payload.uid,
                    user_id=str(user.id),
                    owner_id=str(existing_identity.user_id),
                )
                raise IdentityConflictError(
                    provider.value, payload.uid, "already linked to another user"
                )
            identity = self.identity_service.refresh_identity(
                existing_identity, payload
            )
        else:
            linked = await self.identity_service.get_identity_for_user(
                user.id, provider
            )
            if linked:
                raise IdentityConflictError(
                    provider.value,
                    payload.uid,
                    f"user already has a {provider.value} identity",
                )
            identity = self.identity_service.build_identity(user.id, payload)

        try:
            identity = await self.identity_service.save(identity)
        except IntegrityError as e:
            # Linked by a concurrent sign-in after the lookup
            winner = await self.identity_service.get_identity_by_provider(
                provider, payload.uid
            )
            if winner is None or winner.user_id != user.id:
                logfire.warn(
                    "Identity linked concurrently",
                    provider=provider.value,
                    uid=payload.uid,
                    user_id=str(user.id),
                    error=str(e),
                )
                raise IdentityConflictError(
                    provider.value, payload.uid, "linked by a concurrent sign-in"
                ) from e
            identity = winner

        updated_user = await self.user_service.apply_provider_profile(
            user, provider, extract_profile(payload)
        )
        updated_user = await self.user_service.save(
            updated_user.model_copy(update={"updated_at": datetime.now(timezone.utc)})
        )

        logfire.info(
            "Identity linked to existing user",
            user_id=str(updated_user.id),
            provider=provider.value,
            identity_id=str(identity.id),
        )
        return updated_user, identity

    async def _register(
        self, payload: AuthPayload, signup_cta_variant: str | None
    ) -> tuple[User, Identity, bool]:
        """Create a new user and its first identity.

        Returns the user, the identity and whether the user is new. When a
        concurrent sign-in links the same account first, the new user is
        removed and the account's owner is returned instead.
        """
        profile = extract_profile(payload)
        username = await self.username_service.generate(profile.username)
        now = datetime.now(timezone.utc)

        user = User(
            id=UserId(uuid4()),
            username=username,
            name=payload.info.name,
            email=payload.info.email,
            profile_image_url=payload.info.image,
            signup_cta_variant=signup_cta_variant,
            saw_onboarding=signup_cta_variant is None,
            created_at=now,
            updated_at=now,
        )
        user = await self.user_service.apply_provider_profile(
            user, payload.provider, profile
        )
        user = await self._insert_user(user, profile.username)

        try:
            identity = await self.identity_service.save(
                self.identity_service.build_identity(user.id, payload)
            )
        except IntegrityError as e:
            await self.user_service.delete(user.id)
            owner, winner = await self._concurrent_owner(payload, e)
            return owner, winner, False

        logfire.info(
            "New user registered",
            user_id=str(user.id),
            username=user.username,
            provider=payload.provider.value,
            signup_cta_variant=signup_cta_variant,
        )
        return user, identity, True

    async def _concurrent_owner(
        self, payload: AuthPayload, error: IntegrityError
    ) -> tuple[User, Identity]:
        """Find the user a concurrent sign-in registered for this account."""
        winner = await self.identity_service.get_identity_by_provider(
            payload.provider, payload.uid
        )
        if winner is None:
            logfire.error(
                "Identity insert failed without a competing identity",
                provider=payload.provider.value,
                uid=payload.uid,
                error=str(error),
            )
            raise RegistrationError(
                f"Could not link {payload.provider.value} account {payload.uid}"
            ) from error

        logfire.warn(
            "Account registered by a concurrent sign-in, using its owner",
            provider=payload.provider.value,
            uid=payload.uid,
            user_id=str(winner.user_id),
        )
        owner = await self.user_service.get_by_id(winner.user_id)
        return owner, winner

    async def _insert_user(self, user: User, nickname: str | None) -> User:
        """Insert a new user, retrying once with a new username on collision."""
        try:
            return await self.user_service.save(user)
        except IntegrityError as e:
            logfire.warn(
                "Username taken at insert, regenerating",
                username=user.username,
                error=str(e),
            )

        retry = user.model_copy(
            update={
                "username": await self.username_service.generate(
                    nickname, force_suffix=True
                )
            }
        )
        try:
            return await self.user_service.save(retry)
        except IntegrityError as e:
            logfire.error(
                "Registration failed after username retry",
                username=retry.username,
                error=str(e),
            )
            raise RegistrationError(
                f"Could not register a user for nickname {nickname!r}"
            ) from e

    @staticmethod
    def _response(
        user: User, identity: Identity, is_new_user: bool
    ) -> ResolveIdentityResponse:
        return ResolveIdentityResponse(
            user_id=str(user.id),
            username=user.username,
            identity_id=str(identity.id),
            is_new_user=is_new_user,
        )
