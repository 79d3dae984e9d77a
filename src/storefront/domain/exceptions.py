"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """One or more business rules were violated.

    ``errors`` holds every violation found, never just the first one.
    """

    def __init__(self, errors: str | list[str]) -> None:
        if isinstance(errors, str):
            errors = [errors]
        self.errors: list[str] = list(errors)
        super().__init__("; ".join(self.errors))


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class OrderCreationError(DomainException):
    """The atomic order-creation call refused or failed.

    Terminal for the submission attempt; the cart is left untouched.
    """

    kind = "order-creation-failed"


class OrderRejectedError(OrderCreationError):
    """The storage layer rejected the order payload as invalid."""

    kind = "validation-rejected"


class StockConflictError(OrderCreationError):
    """Current stock can no longer satisfy a requested quantity."""

    kind = "insufficient-stock"


class ConstraintViolationError(OrderCreationError):
    """A storage constraint (e.g. unknown product) refused the order."""

    kind = "constraint-violation"


class TransportError(OrderCreationError):
    """The order-creation primitive could not be reached."""

    kind = "transport-error"


class PersistenceError(DomainException):
    """Saving or loading the local cart failed."""


class NotificationError(DomainException):
    """Best-effort order notification could not be delivered."""
