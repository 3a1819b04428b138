"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the user rules that don't belong to a single
    entity: uniqueness checks across repositories, counters, integrations.
    """

    pass
