"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI and HTTP layers can catch them uniformly and display
user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ActorError(DomainException):
    """A consumer or producer id is unknown or has the wrong role."""


class AuthenticationError(DomainException):
    """Credentials did not match a registered user."""


class NotFoundError(DomainException):
    """A referenced entity does not exist or does not belong to the caller."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InsufficientStockError(ValidationError):
    """Requested quantity exceeds the available stock."""


class UnitMismatchError(ValidationError):
    """Requested unit of measure differs from the product's unit."""


class PriceMismatchError(ValidationError):
    """Client-side price is stale compared to the current product price."""


class InvalidAmountError(ValidationError):
    """A stock adjustment amount was zero or negative."""


class PastRequiredDateError(ValidationError):
    """A transport was requested for a date that has already passed."""


class DuplicateProductError(ValidationError):
    """The producer already lists a product with the same name."""


class DuplicateEmailError(ValidationError):
    """The email address is already registered."""


class StateError(DomainException):
    """An illegal status transition was attempted."""


class ConcurrencyError(DomainException):
    """A concurrent writer won the race for the same aggregate; retry."""
