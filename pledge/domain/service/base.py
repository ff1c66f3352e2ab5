"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold logic that doesn't belong to a single entity,
    such as talking to the comments API on behalf of a view.
    """

    pass
