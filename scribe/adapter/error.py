"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """External provider error."""

    pass


class SearchIndexError(ProviderError):
    """Search index request failed."""

    pass


class NewsletterError(ProviderError):
    """Newsletter provider request failed."""

    pass
