"""Mailchimp newsletter client."""

import hashlib

import httpx
import logfire

from scribe.adapter.error import NewsletterError
from scribe.domain.model import User
from scribe.domain.service import NewsletterClient


def subscriber_hash(email: str) -> str:
    """Mailchimp member id: MD5 of the lowercased email."""
    return hashlib.md5(email.lower().encode("utf-8")).hexdigest()


class MailchimpNewsletterClient(NewsletterClient):
    """Newsletter client backed by the Mailchimp Marketing API."""

    def __init__(
        self,
        api_key: str,
        list_id: str,
        data_center: str,
        timeout: float = 10.0,
    ) -> None:
        """Initialize Mailchimp client.

        Args:
            api_key: Mailchimp API key
            list_id: Audience (list) id
            data_center: Data center prefix, e.g. "us6"
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.list_id = list_id
        self.timeout = timeout
        self.members_url = (
            f"https://{data_center}.api.mailchimp.com/3.0/lists/{list_id}/members"
        )

    async def subscribe(self, user: User) -> bool:
        """Add or update the user as a subscribed list member.

        Args:
            user: User with an email address

        Returns:
            True if subscribed, False if the user has no email

        Raises:
            NewsletterError: If the request fails
        """
        if not user.email:
            return False

        url = f"{self.members_url}/{subscriber_hash(user.email)}"
        body = {
            "email_address": user.email,
            "status_if_new": "subscribed",
            "merge_fields": {"NAME": user.name or "", "USERNAME": user.username},
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.put(
                    url,
                    json=body,
                    auth=("scribe", self.api_key),
                    timeout=self.timeout,
                )

                if response.status_code != 200:
                    logfire.error(
                        "Mailchimp subscribe failed",
                        status_code=response.status_code,
                        error=response.text,
                        user_id=str(user.id),
                    )
                    raise NewsletterError(
                        f"Subscribe request failed: {response.status_code}"
                    )

        except httpx.HTTPError as e:
            logfire.error("Mailchimp HTTP error", error=str(e), user_id=str(user.id))
            raise NewsletterError(f"HTTP error subscribing user: {e}")

        logfire.info("User subscribed to newsletter", user_id=str(user.id))
        return True


class MockNewsletterClient(NewsletterClient):
    """Mock newsletter client for testing and for running without Mailchimp."""

    def __init__(self) -> None:
        self.subscribed: list[str] = []

    async def subscribe(self, user: User) -> bool:
        """Record the user's email."""
        if not user.email:
            return False
        self.subscribed.append(user.email)
        return True
