"""
Error taxonomy shared by the gateways, services and controllers.

Controllers catch DomainError and surface the message to the user; anything
else is a bug and is allowed to propagate.
"""


class DomainError(Exception):
    """Domain-level error suitable for surfacing to the UI."""
    pass


class ValidationError(DomainError):
    """Malformed or out-of-range input. Raised before any write."""
    pass


class StorageError(DomainError):
    """The persistence backend failed to read or write."""
    pass


class NotFoundError(DomainError):
    """A delete/update referenced an id (or product) that does not exist."""
    pass
