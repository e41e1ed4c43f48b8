"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold business logic spanning several entities or
    external collaborators.
    """

    pass
