"""Domain services."""

from .base import Service
from .follow_service import FollowService
from .identity_service import IdentityService, extract_profile
from .integration_service import (
    IntegrationService,
    JobQueue,
    NewsletterClient,
    SearchIndex,
)
from .language_service import LanguageService
from .user_service import UserService
from .username_service import UsernameService

__all__ = [
    "FollowService",
    "IdentityService",
    "IntegrationService",
    "JobQueue",
    "LanguageService",
    "NewsletterClient",
    "SearchIndex",
    "Service",
    "UserService",
    "UsernameService",
    "extract_profile",
]
