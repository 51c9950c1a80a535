"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold business logic that spans an aggregate and its
    collaborators (repositories, hashers, outbound clients).
    """

    pass
