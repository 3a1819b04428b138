"""Mailchimp newsletter adapter."""

from .client import MailchimpNewsletterClient, MockNewsletterClient

__all__ = ["MailchimpNewsletterClient", "MockNewsletterClient"]
