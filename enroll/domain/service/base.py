"""Base service class for domain services."""


class Service:
    """Base class for registration domain services.

    Services hold registration rules that do not belong to IdentityRecord
    itself: hashing, token handling, validation and provider routing. They
    keep no per-request state beyond their collaborators.
    """

    pass
