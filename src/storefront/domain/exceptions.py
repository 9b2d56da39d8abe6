"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI and HTTP layers can catch them uniformly and display
user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class MissingFieldError(ValidationError):
    """A required input field was not supplied."""


class InvalidStatusTransitionError(ValidationError):
    """An order status change is not allowed from the current status."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InsufficientStockError(DomainException):
    """The requested quantity exceeds the live stock of a variant."""


class ForbiddenError(DomainException):
    """The caller's role does not permit the operation."""


class ConcurrencyConflictError(DomainException):
    """The aggregate was modified by someone else since it was loaded."""
